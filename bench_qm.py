#!/usr/bin/env python3
import os, sys, time, argparse, json, csv
from typing import Dict, List, Optional
import numpy as np

from boolean_validate import verify_cover
from implicant import Implicant
from qm_io import literal_count_of
from qm_minimize import ImplicantTable, find_prime_implicants, select_prime_implicants

# ============ Random functions ============
def random_on_set(n: int, density: float, rng: np.random.Generator) -> List[int]:
    """Each of the 2^n vertices is on with probability `density`."""
    return np.flatnonzero(rng.random(1 << n) < density).tolist()

def run_trial(n: int, on_set: List[int]) -> Dict[str, object]:
    terms = [Implicant.from_vertice(n, x) for x in on_set]

    t0 = time.perf_counter()
    table = ImplicantTable(sorted(terms, key=Implicant.sort_key))
    primes = find_prime_implicants(table)
    t1 = time.perf_counter()
    answer = select_prime_implicants(primes, n)
    t2 = time.perf_counter()

    return {
        "nvars": n, "on_count": len(on_set), "table_size": len(table),
        "primes": len(primes), "answer": len(answer),
        "literals": literal_count_of(answer),
        "t_primes": t1 - t0, "t_select": t2 - t1,
        "ok": verify_cover(terms, answer, n),
    }

# ============ CLI main ============
def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Time prime generation and cover selection on random functions.")
    parser.add_argument("--out", type=str, default="results")
    parser.add_argument("--timestamp", type=str, default="")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--nvars", type=int, nargs="+", default=[4, 6, 8, 10])
    parser.add_argument("--density", type=float, default=0.5)
    parser.add_argument("--trials", type=int, default=5)
    args = parser.parse_args(argv)

    if not 0.0 <= args.density <= 1.0:
        print(f"[error] density must be in [0, 1], got {args.density}", file=sys.stderr)
        return 2

    os.makedirs(args.out, exist_ok=True)
    stamp = args.timestamp or time.strftime("%Y%m%d-%H%M%S")
    out_csv = os.path.join(args.out, f"qm_bench_{stamp}.csv")
    out_json = os.path.join(args.out, f"qm_bench_{stamp}.json")

    rng = np.random.default_rng(args.seed)
    rows = []
    t0 = time.time()
    for n in args.nvars:
        print(f"\n== n={n} density={args.density} ==")
        for trial in range(args.trials):
            row = run_trial(n, random_on_set(n, args.density, rng))
            row["trial"] = trial
            print(f"  trial={trial}  on={row['on_count']:5d}  primes={row['primes']:4d}  "
                  f"answer={row['answer']:4d}  lits={row['literals']:5d}  "
                  f"t_primes={row['t_primes']*1e3:8.2f}ms  t_select={row['t_select']*1e3:8.2f}ms"
                  f"{'' if row['ok'] else '  MISMATCH'}")
            rows.append(row)
    print(f"\nTotal time: {time.time() - t0:.2f}s")

    if not rows:
        print("[warn] no trials run, nothing written", file=sys.stderr)
        return 0

    # write CSV
    with open(out_csv, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        w.writerows(rows)
    # write JSON
    with open(out_json, "w") as f:
        json.dump(rows, f, indent=2)
    print(f"[ok] wrote {out_csv} and {out_json}")
    return 1 if not all(r["ok"] for r in rows) else 0

if __name__ == "__main__":
    raise SystemExit(main())
