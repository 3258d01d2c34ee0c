#!/usr/bin/env python3
# Ternary product terms over N Boolean variables.
# An implicant is a tuple of {0, 1, DC}; DC = 2 = don't care.
# Vertices are integers 0..2^N-1 where bit i is the value of variable i (little-endian).

from dataclasses import dataclass
from itertools import product
from typing import Iterator, Optional, Tuple

from qm_errors import InternalInvariantViolation, InvalidPatternCharacter

F, T, DC = 0, 1, 2

_CHAR_TO_VALUE = {"0": F, "1": T, "-": DC}
_VALUE_TO_CHAR = {F: "0", T: "1", DC: "-"}


@dataclass(frozen=True)
class Implicant:
    values: Tuple[int, ...]

    @classmethod
    def from_string(cls, text: str, term: Optional[int] = None) -> "Implicant":
        """Parse a '1'/'0'/'-' string. Any other character is rejected."""
        values = []
        for pos, ch in enumerate(text):
            v = _CHAR_TO_VALUE.get(ch)
            if v is None:
                raise InvalidPatternCharacter(ch, pos, term)
            values.append(v)
        return cls(tuple(values))

    @classmethod
    def from_vertice(cls, nvars: int, vertice: int) -> "Implicant":
        return cls(tuple((vertice >> i) & 1 for i in range(nvars)))

    def __len__(self) -> int:
        return len(self.values)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Implicant({self.num_pos_lits()}, {self.to_string()})"

    def to_string(self) -> str:
        return "".join(_VALUE_TO_CHAR[v] for v in self.values)

    def num_pos_lits(self) -> int:
        return sum(1 for v in self.values if v == T)

    def num_lits(self) -> int:
        return sum(1 for v in self.values if v != DC)

    def num_dc(self) -> int:
        return len(self.values) - self.num_lits()

    # canonical order: positive literal count, then values (0 < 1 < DC).
    # DC sorts last on purpose; the tie order decides which cover the greedy step returns.
    def sort_key(self) -> Tuple[int, Tuple[int, ...]]:
        return (self.num_pos_lits(), self.values)

    def __lt__(self, other: "Implicant") -> bool:
        return self.sort_key() < other.sort_key()

    def covers(self, vertice: int) -> bool:
        for i, v in enumerate(self.values):
            if v != DC and v != (vertice >> i) & 1:
                return False
        return True

    def covered(self) -> Iterator[int]:
        """Yield every vertice matched by this implicant, 2^(#DC) in total.

        Fixed positions contribute a constant base; each don't-care bit is
        enumerated over {0, 1}. Every call starts a fresh enumeration.
        """
        base = 0
        dc_bits = []
        for i, v in enumerate(self.values):
            if v == T:
                base |= 1 << i
            elif v == DC:
                dc_bits.append(1 << i)
        for choice in product((0, 1), repeat=len(dc_bits)):
            vertice = base
            for bit, on in zip(dc_bits, choice):
                if on:
                    vertice |= bit
            yield vertice

    def try_merge(self, other: "Implicant") -> Optional["Implicant"]:
        """Merge two implicants that differ in exactly one position.

        Returns the merged implicant (that position set to DC), or None when
        they differ in two or more positions. Identical implicants must never
        reach here: the generation table deduplicates every round.
        """
        if len(self.values) != len(other.values):
            raise ValueError(f"length mismatch: {self} vs {other}")

        diff_index = None
        for i, (a, b) in enumerate(zip(self.values, other.values)):
            if a != b:
                if diff_index is not None:
                    return None
                diff_index = i

        if diff_index is None:
            raise InternalInvariantViolation(f"attempted to merge identical implicants {self}")

        values = list(self.values)
        values[diff_index] = DC
        return Implicant(tuple(values))


@dataclass
class MarkedImplicant:
    imp: Implicant
    reduced: bool = False

    def mark_reduced(self) -> None:
        self.reduced = True

    def __repr__(self) -> str:
        return f"MarkedImplicant({'_' if self.reduced else 'O'}, {self.imp!r})"
