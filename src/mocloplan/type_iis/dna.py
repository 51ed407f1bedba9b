from __future__ import annotations

import re
from typing import List

_RC = str.maketrans("ACGTacgt", "TGCAtgca")
_NON_IUPAC_RE = re.compile(r"[^ATCGRYSWKMBDHVN]", re.IGNORECASE)


def clean_iupac(text: str) -> str:
    """Drop every character that is not an IUPAC nucleotide code; uppercase the rest."""
    return _NON_IUPAC_RE.sub("", text).upper()


def reverse_complement(seq: str) -> str:
    # Only A/C/G/T are complemented; anything else passes through unchanged.
    return seq.translate(_RC)[::-1]


def is_palindromic(seq: str) -> bool:
    return seq == reverse_complement(seq)


def gc_fraction(seq: str) -> float:
    if not seq:
        return 0.0
    s = seq.upper()
    return (s.count("G") + s.count("C")) / len(s)


def find_all_overlapping(haystack: str, needle: str) -> List[int]:
    if not needle:
        return []
    hits = []
    start = 0
    while True:
        i = haystack.find(needle, start)
        if i == -1:
            break
        hits.append(i)
        start = i + 1
    return hits


def clamped_slice(seq: str, start: int, end: int) -> str:
    n = len(seq)
    a = min(max(start, 0), n)
    b = min(max(end, 0), n)
    return seq[a:b]
