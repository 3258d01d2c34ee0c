# tests/test_boolean_validate.py
from itertools import product

import numpy as np
import pytest

import boolean_validate
from boolean_validate import TASKS, build_inputs, run_one, truth_table, verify_cover
from implicant import DC, Implicant


def test_build_inputs():
    X = build_inputs(3)
    assert X.shape == (8, 3)
    assert X[6].tolist() == [0, 1, 1]


def test_truth_table_agrees_with_covered():
    for values in product((0, 1, DC), repeat=3):
        imp = Implicant(values)
        y = truth_table([imp], 3)
        assert np.flatnonzero(y).tolist() == sorted(imp.covered())


def test_verify_cover():
    terms = [Implicant.from_string(t) for t in ("00", "01")]
    assert verify_cover(terms, [Implicant.from_string("0-")], 2)
    assert not verify_cover(terms, [Implicant.from_string("--")], 2)


@pytest.mark.parametrize("task", TASKS, ids=lambda t: t.name)
def test_tasks_minimize_exactly(task):
    answer, ok = run_one(task)
    assert ok


def test_known_sizes():
    by_name = {t.name: t for t in TASKS}
    assert len(run_one(by_name["MAJ3"])[0]) == 3
    assert len(run_one(by_name["PARITY4"])[0]) == 8
    assert run_one(by_name["AND2"])[0] == [Implicant.from_string("11")]


def test_main(capsys):
    assert boolean_validate.main(["--task", "XOR2", "--task", "MUX3"]) == 0
    out = capsys.readouterr().out
    assert "=== XOR2 (n=2) ===" in out
    assert "=== MAJ3" not in out
    assert boolean_validate.main(["--task", "NOPE"]) == 2
