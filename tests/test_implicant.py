# tests/test_implicant.py
from itertools import product

import pytest

from implicant import DC, Implicant, MarkedImplicant
from qm_errors import InternalInvariantViolation, InvalidPatternCharacter

ALL3 = [Implicant(v) for v in product((0, 1, DC), repeat=3)]


def test_from_string_and_back():
    imp = Implicant.from_string("1-0")
    assert imp.values == (1, DC, 0)
    assert imp.to_string() == "1-0"
    assert imp.num_pos_lits() == 1
    assert imp.num_lits() == 2


def test_from_string_rejects_unknown_character():
    with pytest.raises(InvalidPatternCharacter) as ei:
        Implicant.from_string("1x0", term=4)
    assert ei.value.char == "x"
    assert ei.value.position == 1
    assert ei.value.term == 4


def test_from_vertice_is_little_endian():
    assert Implicant.from_vertice(3, 4).to_string() == "001"
    assert Implicant.from_vertice(3, 1).to_string() == "100"


def test_try_merge_one_difference():
    a = Implicant.from_string("0110")
    b = Implicant.from_string("0100")
    assert a.try_merge(b) == Implicant.from_string("01-0")
    assert b.try_merge(a) == Implicant.from_string("01-0")


def test_try_merge_dc_against_fixed_counts_as_difference():
    a = Implicant.from_string("1-")
    b = Implicant.from_string("11")
    assert a.try_merge(b) == Implicant.from_string("1-")


def test_try_merge_two_or_more_differences():
    assert Implicant.from_string("0011").try_merge(Implicant.from_string("0000")) is None
    assert Implicant.from_string("01-").try_merge(Implicant.from_string("10-")) is None


def test_try_merge_identical_is_invariant_violation():
    a = Implicant.from_string("0-1")
    with pytest.raises(InternalInvariantViolation):
        a.try_merge(Implicant.from_string("0-1"))


def test_try_merge_length_mismatch():
    with pytest.raises(ValueError):
        Implicant.from_string("01").try_merge(Implicant.from_string("011"))


def test_covered_matches_covers():
    for imp in ALL3:
        cov = list(imp.covered())
        assert len(cov) == 2 ** imp.num_dc()
        assert len(set(cov)) == len(cov)
        for v in range(8):
            assert imp.covers(v) == (v in cov)
        # restartable
        assert list(imp.covered()) == cov


def test_canonical_sort_is_total_and_idempotent():
    once = sorted(reversed(ALL3))
    assert sorted(once) == once
    assert sorted(once, key=Implicant.sort_key) == once
    counts = [imp.num_pos_lits() for imp in once]
    assert counts == sorted(counts)
    assert len(set(once)) == len(ALL3)


def test_marked_implicant_flag():
    m = MarkedImplicant(Implicant.from_string("01"))
    assert not m.reduced
    m.mark_reduced()
    assert m.reduced
    assert m.imp == Implicant.from_string("01")
