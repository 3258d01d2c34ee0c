#!/usr/bin/env python3
"""
Term-file reader and result writer for the minimizer.

Input format
------------
    <nvars> <nterms>
    <term> <term> ...

Each term is `nvars` characters from {'1', '0', '-'}. Whitespace (including
newlines) anywhere after the header is skipped, so terms may be split or
packed freely.

Output format
-------------
    <total literal count>
    <number of implicants>
    <implicant>
    ...
"""

import logging
from typing import List, Sequence, Tuple

from implicant import Implicant
from qm_errors import InputFormatError

logger = logging.getLogger(__name__)


def parse_implicants(text: str) -> Tuple[List[Implicant], int, int]:
    """Return (terms, nvars, nterms) parsed from the contents of a term file."""
    tokens = text.split(None, 2)
    if len(tokens) < 2:
        raise InputFormatError("failed to read nvars and (or) nterms")
    try:
        nvars = int(tokens[0])
        nterms = int(tokens[1])
    except ValueError:
        raise InputFormatError(f"failed to read nvars and (or) nterms from {tokens[0]!r} {tokens[1]!r}") from None
    if nvars < 0 or nterms < 0:
        raise InputFormatError(f"nvars and nterms must be non-negative, got {nvars} {nterms}")

    body = "".join(tokens[2].split()) if len(tokens) > 2 else ""
    need = nvars * nterms
    if len(body) < need:
        raise InputFormatError(
            f"expected {nterms} terms of {nvars} characters, found only {len(body)} characters")
    if len(body) > need:
        logger.warning("ignoring %d trailing characters after %d terms", len(body) - need, nterms)

    terms = []
    for k in range(nterms):
        imp = Implicant.from_string(body[k * nvars:(k + 1) * nvars], term=k)
        logger.debug("read %r", imp)
        terms.append(imp)
    return terms, nvars, nterms


def read_implicants(path: str) -> Tuple[List[Implicant], int, int]:
    try:
        with open(path, "r", encoding="ascii") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise InputFormatError(f"not a text term file ({e})") from None
    return parse_implicants(text)


def literal_count_of(imps: Sequence[Implicant]) -> int:
    return sum(imp.num_lits() for imp in imps)


def format_implicants(imps: Sequence[Implicant]) -> str:
    lines = [str(literal_count_of(imps)), str(len(imps))]
    lines.extend(imp.to_string() for imp in imps)
    return "\n".join(lines) + "\n"


def write_implicants(path: str, imps: Sequence[Implicant]) -> None:
    text = format_implicants(imps)
    with open(path, "w") as f:
        f.write(text)
