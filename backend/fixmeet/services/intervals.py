"""
Half-open interval algebra on ``(start, end)`` datetime pairs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Sequence, Tuple

Span = Tuple[datetime, datetime]


def overlaps(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    return not (end <= other_start or start >= other_end)


def merge_spans(spans: Iterable[Span]) -> List[Span]:
    """
    Union of ``spans``, sorted by start.

    Spans that overlap or touch end-to-start are folded into one.
    """
    ordered = sorted(spans, key=lambda span: (span[0], span[1]))
    if not ordered:
        return []

    merged: List[Span] = [ordered[0]]
    for start, end in ordered[1:]:
        last_start, last_end = merged[-1]
        if start <= last_end:
            if end > last_end:
                merged[-1] = (last_start, end)
        else:
            merged.append((start, end))
    return merged


def subtract_span(span: Span, block: Span) -> List[Span]:
    """
    Remove ``block`` from ``span``.

    Returns zero, one or two spans: a block covering the span removes it,
    one touching an edge truncates it, one strictly inside splits it.
    """
    start, end = span
    block_start, block_end = block

    if block_end <= start or block_start >= end:
        return [span]

    pieces: List[Span] = []
    if block_start > start:
        pieces.append((start, block_start))
    if block_end < end:
        pieces.append((block_end, end))
    return pieces


def subtract_spans(span: Span, blocks: Sequence[Span]) -> List[Span]:
    """Remove every block from ``span``; blocks must be sorted by start."""
    remaining: List[Span] = [span]
    for block in blocks:
        if block[0] >= span[1]:
            break
        next_remaining: List[Span] = []
        for piece in remaining:
            next_remaining.extend(subtract_span(piece, block))
        remaining = next_remaining
        if not remaining:
            break
    return remaining
