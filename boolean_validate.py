#!/usr/bin/env python3
import argparse
import sys
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from implicant import DC, Implicant
from qm_minimize import cube_to_literals, dnf_to_str, minimize

# ---------- utilities ----------
def to_bits(n: int, w: int) -> Tuple[int, ...]:
    return tuple((n >> i) & 1 for i in range(w))

def build_inputs(n: int) -> np.ndarray:
    """All 2^n assignments as rows of a [2^n, n] uint8 matrix; row a has bit i of a in column i."""
    a = np.arange(1 << n, dtype=np.int64)[:, None]
    return ((a >> np.arange(n, dtype=np.int64)[None, :]) & 1).astype(np.uint8)

def evaluate(imps: Sequence[Implicant], X01: np.ndarray) -> np.ndarray:
    """Evaluate the sum of products `imps` on every row of X01."""
    y = np.zeros(X01.shape[0], dtype=bool)
    for imp in imps:
        vals = np.array(imp.values, dtype=np.uint8)
        fixed = vals != DC
        if not fixed.any():
            y[:] = True
            continue
        y |= np.all(X01[:, fixed] == vals[fixed], axis=1)
    return y

def truth_table(imps: Sequence[Implicant], n: int) -> np.ndarray:
    return evaluate(imps, build_inputs(n))

def verify_cover(terms: Sequence[Implicant], answer: Sequence[Implicant], n: int) -> bool:
    """True iff `answer` is on exactly where the input terms are on."""
    X01 = build_inputs(n)
    return bool(np.array_equal(evaluate(terms, X01), evaluate(answer, X01)))

# ---------- boolean tasks ----------
@dataclass
class BoolTask:
    name: str
    n_bits: int
    fn: Callable[[Tuple[int,...]], int]

def TT_AND(a,b): return a & b
def TT_OR(a,b): return a | b
def TT_NAND(a,b): return 1 - (a & b)
def TT_NOR(a,b): return 1 - (a | b)
def TT_XOR(a,b): return a ^ b
def TT_XNOR(a,b): return 1 - (a ^ b)
def TT_MAJ3(a,b,c): return 1 if (a+b+c) >= 2 else 0
def TT_MUX(s,a,b): return a if s==0 else b
def TT_PARITY(*xs): return sum(xs) & 1
def TT_FA_CARRY(a,b,c): return 1 if (a+b+c) >= 2 else 0
def TT_FA_SUM(a,b,c): return a ^ b ^ c

TASKS: List[BoolTask] = [
    BoolTask("AND2",    2, lambda x: TT_AND(x[0],x[1])),
    BoolTask("OR2",     2, lambda x: TT_OR(x[0],x[1])),
    BoolTask("XOR2",    2, lambda x: TT_XOR(x[0],x[1])),
    BoolTask("XNOR2",   2, lambda x: TT_XNOR(x[0],x[1])),
    BoolTask("NAND2",   2, lambda x: TT_NAND(x[0],x[1])),
    BoolTask("NOR2",    2, lambda x: TT_NOR(x[0],x[1])),
    BoolTask("MAJ3",    3, lambda x: TT_MAJ3(x[0],x[1],x[2])),
    BoolTask("MUX3",    3, lambda x: TT_MUX(x[0],x[1],x[2])),
    BoolTask("FA_SUM",  3, lambda x: TT_FA_SUM(x[0],x[1],x[2])),
    BoolTask("FA_CARRY",3, lambda x: TT_FA_CARRY(x[0],x[1],x[2])),
    BoolTask("PARITY4", 4, lambda x: TT_PARITY(*x)),
    BoolTask("GE2_OF_4",4, lambda x: 1 if sum(x) >= 2 else 0),
]

# ---------- harness ----------
def build_truth_table(task: BoolTask) -> Tuple[np.ndarray, np.ndarray, List[int]]:
    n = task.n_bits
    X01 = build_inputs(n)
    y01 = np.zeros((1 << n,), dtype=bool)
    on_set = []
    for a in range(1 << n):
        y = task.fn(to_bits(a, n))
        y01[a] = bool(y)
        if y == 1:
            on_set.append(a)
    return X01, y01, on_set

def run_one(task: BoolTask) -> Tuple[List[Implicant], bool]:
    X01, y01, on_set = build_truth_table(task)
    terms = [Implicant.from_vertice(task.n_bits, a) for a in on_set]
    answer = minimize(terms, task.n_bits)
    ok = bool(np.array_equal(evaluate(answer, X01), y01))
    return answer, ok

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Minimize a catalogue of small Boolean functions and check each cover.")
    ap.add_argument("--task", action="append", default=None,
                    help="Only run this task (repeatable). Default: all.")
    return ap.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    name_to_task: Dict[str, BoolTask] = {t.name: t for t in TASKS}
    names = args.task or [t.name for t in TASKS]
    unknown = [nm for nm in names if nm not in name_to_task]
    if unknown:
        print(f"[error] unknown task(s): {', '.join(unknown)}", file=sys.stderr)
        return 2

    failures = 0
    t0 = time.time()
    for name in names:
        task = name_to_task[name]
        answer, ok = run_one(task)
        lits = sum(imp.num_lits() for imp in answer)
        print(f"\n=== {name} (n={task.n_bits}) ===")
        print(f"terms={len(answer)} | literals={lits} | cover {'ok' if ok else 'MISMATCH'}")
        print("Minimal DNF:")
        print("  ", dnf_to_str([cube_to_literals(c) for c in answer]))
        if not ok:
            failures += 1

    t1 = time.time()
    print(f"\nTotal time: {t1 - t0:.2f}s")
    return 1 if failures else 0

if __name__ == "__main__":
    raise SystemExit(main())
