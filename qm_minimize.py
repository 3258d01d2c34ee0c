#!/usr/bin/env python3
# Pure-Python Quine–McCluskey (DNF) with greedy weighted set cover.
# Input: list of ternary implicants (the on-set), all of length n.
# Output: list of prime implicants covering the on-set:
#   essential primes first, then greedily selected primes.

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from implicant import DC, Implicant, MarkedImplicant
from qm_errors import InternalInvariantViolation

logger = logging.getLogger(__name__)

Literal = Tuple[int, int]  # (var_idx, polarity), polarity = +1 for x_i, -1 for ¬x_i


class ImplicantTable:
    """Arena of marked implicants addressed by integer handles.

    The table only grows. Each round of prime generation appends one new
    generation at the tail; once a generation is sealed (sorted and
    deduplicated) the handles of its entries never change.
    """

    def __init__(self, implicants: Iterable[Implicant] = ()):
        self._entries: List[MarkedImplicant] = [MarkedImplicant(imp) for imp in implicants]

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, handle: int) -> MarkedImplicant:
        return self._entries[handle]

    def __iter__(self):
        return iter(self._entries)

    def append(self, imp: Implicant) -> int:
        self._entries.append(MarkedImplicant(imp))
        return len(self._entries) - 1

    def mark_reduced(self, handle: int) -> None:
        self._entries[handle].mark_reduced()

    def group_starts(self, start: int, end: int) -> List[int]:
        """Start handles of each run of equal positive-literal count in [start, end)."""
        starts = []
        last = None
        for h in range(start, end):
            k = self._entries[h].imp.num_pos_lits()
            if k != last:
                starts.append(h)
                last = k
        return starts

    def seal_generation(self, start: int) -> None:
        # new entries are all unmarked, so deduplicating on the implicant alone is safe
        tail = sorted(self._entries[start:], key=lambda m: m.imp.sort_key())
        seen: Set[Implicant] = set()
        sealed = []
        for m in tail:
            if m.imp in seen:
                continue
            seen.add(m.imp)
            sealed.append(m)
        del self._entries[start:]
        self._entries.extend(sealed)

    def unreduced(self) -> List[Implicant]:
        return [m.imp for m in self._entries if not m.reduced]


def _merge_round(table: ImplicantTable, start: int, end: int) -> bool:
    """Merge adjacent groups of the generation [start, end). Returns True on progress."""
    starts = table.group_starts(start, end)
    logger.debug("generation [%d, %d): group starts %s", start, end, starts)

    progress = False
    for g in range(len(starts) - 1):
        prev_lo, prev_hi = starts[g], starts[g + 1]
        next_lo = starts[g + 1]
        next_hi = starts[g + 2] if g + 2 < len(starts) else end
        for i in range(prev_lo, prev_hi):
            for j in range(next_lo, next_hi):
                merged = table[i].imp.try_merge(table[j].imp)
                if merged is None:
                    continue
                logger.debug("reducing %r and %r into %r", table[i], table[j], merged)
                table.append(merged)
                table.mark_reduced(i)
                table.mark_reduced(j)
                progress = True
    return progress


def find_prime_implicants(table: ImplicantTable) -> List[Implicant]:
    """Run merge rounds until no progress; return the unmarked implicants.

    `table` must hold the initial terms in canonical order (generation 0).
    Merges found while scanning generation k are only compared against each
    other in the next round: the scan bounds are fixed before any append.
    """
    start = 0
    while True:
        end = len(table)
        progress = _merge_round(table, start, end)
        table.seal_generation(end)
        start = end
        if not progress:
            logger.debug("no progress, %d entries in table", len(table))
            break

    primes = sorted(set(table.unreduced()), key=Implicant.sort_key)
    logger.debug("prime implicants: %s", primes)
    return primes


class Incidence:
    """Prime -> covered vertices (itov) and vertice -> covering primes (vtoi).

    Both maps are updated together; `uncovered` is the union of all itov sets
    that have not been claimed yet.
    """

    def __init__(self, primes: Sequence[Implicant]):
        self.itov: List[Set[int]] = [set() for _ in primes]
        self.vtoi: Dict[int, Set[int]] = defaultdict(set)
        self.uncovered: Set[int] = set()
        for i, prime in enumerate(primes):
            for vertice in prime.covered():
                self.itov[i].add(vertice)
                self.vtoi[vertice].add(i)
                self.uncovered.add(vertice)

    def sole_coverers(self) -> Set[int]:
        return {next(iter(s)) for v, s in sorted(self.vtoi.items()) if len(s) == 1}

    def claim(self, i: int) -> None:
        """Take prime i: its vertices leave `uncovered` and every other prime's itov."""
        for vertice in self.itov[i]:
            self.uncovered.discard(vertice)
            for other in self.vtoi[vertice]:
                if other != i:
                    self.itov[other].discard(vertice)


def score(n_uncovered: int, n_lits: int) -> float:
    if n_lits == 0:
        # the all-DC implicant covers everything with no literals
        return float("inf") if n_uncovered else 0.0
    return n_uncovered / n_lits


def select_prime_implicants(primes: Sequence[Implicant], nvars: int) -> List[Implicant]:
    """Pick a subset of `primes` covering every vertice any of them covers.

    1. Essential primes (sole coverer of some vertice), single pass.
    2. Greedy: repeatedly take the unused prime with the most still-uncovered
       vertices per literal. Ties go to the later prime (>=).
    """
    for p in primes:
        if len(p) != nvars:
            raise ValueError(f"implicant {p} has {len(p)} variables, expected {nvars}")

    incidence = Incidence(primes)
    ess_idx = sorted(incidence.sole_coverers(), reverse=True)
    ess_primes = [primes[i] for i in ess_idx]
    logger.debug("essential prime implicants: %s", ess_primes)

    ess_set = set(ess_idx)
    remaining = [p for i, p in enumerate(primes) if i not in ess_set]
    incidence = Incidence(remaining)
    used = [False] * len(remaining)

    while incidence.uncovered:
        best_i: Optional[int] = None
        best_score = 0.0
        for i, prime in enumerate(remaining):
            if used[i]:
                continue
            s = score(len(incidence.itov[i]), prime.num_lits())
            if s >= best_score:
                best_i = i
                best_score = s

        if best_i is None:
            raise InternalInvariantViolation(
                f"no candidate left with {len(incidence.uncovered)} vertices uncovered")

        logger.debug("selecting %r (score %.3f)", remaining[best_i], best_score)
        used[best_i] = True
        incidence.claim(best_i)

    answers = list(ess_primes)
    answers.extend(p for i, p in enumerate(remaining) if used[i])
    return answers


def minimize(terms: Sequence[Implicant], nvars: Optional[int] = None) -> List[Implicant]:
    """Terms -> canonical order -> prime implicants -> selected cover."""
    if nvars is None:
        if not terms:
            return []
        nvars = len(terms[0])
    for t in terms:
        if len(t) != nvars:
            raise ValueError(f"term {t} has {len(t)} variables, expected {nvars}")

    table = ImplicantTable(sorted(terms, key=Implicant.sort_key))
    logger.debug("sorted terms: %s", [m.imp for m in table])
    primes = find_prime_implicants(table)
    return select_prime_implicants(primes, nvars)


def cube_to_literals(c: Implicant) -> Tuple[Literal, ...]:
    # return tuple of (var_index, polarity) where polarity=+1 for x_i, -1 for ¬x_i
    out = []
    for i, v in enumerate(c.values):
        if v == DC: continue
        out.append((i, +1 if v == 1 else -1))
    return tuple(out)


def minimize_to_dnf(n: int, on_set: List[int]) -> List[Tuple[Literal, ...]]:
    for x in on_set:
        if not 0 <= x < (1 << n):
            raise ValueError(f"minterm {x} out of range for {n} variables")
    terms = [Implicant.from_vertice(n, x) for x in sorted(set(on_set))]
    return [cube_to_literals(c) for c in minimize(terms, n)]


# Pretty-printer
def literals_to_str(lits: Tuple[Literal, ...]) -> str:
    if not lits: return "1"  # tautology
    parts = []
    for i, pol in lits:
        parts.append(f"x{i}" if pol > 0 else f"¬x{i}")
    return "*".join(parts)


def dnf_to_str(dnf: List[Tuple[Literal, ...]]) -> str:
    if not dnf: return "0"
    return " + ".join(literals_to_str(lits) for lits in dnf)


if __name__ == "__main__":
    # tiny demo: XOR2 truth table (n=2 → ON = {01,10})
    print(dnf_to_str(minimize_to_dnf(2, [1, 2])))
