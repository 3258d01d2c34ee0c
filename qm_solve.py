#!/usr/bin/env python3
"""
Minimize a Boolean function given as a term file with Quine–McCluskey.

Examples
--------
# Read terms from in.txt, write the selected prime implicants to out.txt
python qm_solve.py in.txt out.txt

# Same, with a per-merge trace on stderr and a truth-table check of the answer
python qm_solve.py -v --check in.txt out.txt

The output file is only written once the minimization has finished.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from boolean_validate import verify_cover
from qm_errors import InputFormatError
from qm_io import literal_count_of, read_implicants, write_implicants
from qm_minimize import cube_to_literals, dnf_to_str, minimize

# --check enumerates every input assignment
MAX_CHECK_VARS = 24


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Quine–McCluskey two-level minimizer.")
    ap.add_argument("input", help="Term file: 'nvars nterms' followed by nterms 1/0/- terms.")
    ap.add_argument("output", help="Where to write the literal count, implicant count and implicants.")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="Trace table contents, merges and selections on stderr.")
    ap.add_argument("--check", action="store_true",
                    help=f"Verify the answer against the input on-set before writing it "
                         f"(builds a 2^nvars truth table; skipped above {MAX_CHECK_VARS} variables).")
    ap.add_argument("--print", dest="print_dnf", action="store_true",
                    help="Also print the answer as a DNF expression.")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(name)s: %(message)s")

    try:
        terms, nvars, nterms = read_implicants(args.input)
    except OSError as e:
        print(f"[error] cannot read {args.input}: {e}", file=sys.stderr)
        return 2
    except InputFormatError as e:
        print(f"[error] {args.input}: {e}", file=sys.stderr)
        return 2

    t0 = time.time()
    answer = minimize(terms, nvars)
    dt = time.time() - t0

    if args.check:
        if nvars > MAX_CHECK_VARS:
            print(f"[warn] skipping --check: {nvars} variables > {MAX_CHECK_VARS}", file=sys.stderr)
        elif not verify_cover(terms, answer, nvars):
            print("[error] selected implicants do not match the input on-set", file=sys.stderr)
            return 1

    try:
        write_implicants(args.output, answer)
    except OSError as e:
        print(f"[error] cannot write {args.output}: {e}", file=sys.stderr)
        return 2
    print(f"[ok] {nterms} terms → {len(answer)} implicants, "
          f"{literal_count_of(answer)} literals → {args.output} ({dt:.3f}s)")
    if args.print_dnf:
        print(dnf_to_str([cube_to_literals(c) for c in answer]))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
