"""Tests for the interval algebra helpers."""

from fixmeet.services.intervals import merge_spans, overlaps, subtract_span, subtract_spans
from helpers import MONDAY, span


def s(start, end):
    return span(MONDAY, start, end)


class TestMergeSpans:
    def test_empty(self):
        assert merge_spans([]) == []

    def test_overlapping_and_unsorted(self):
        merged = merge_spans([s((13, 0), (14, 0)), s((9, 0), (11, 0)), s((10, 0), (12, 0))])
        assert merged == [s((9, 0), (12, 0)), s((13, 0), (14, 0))]

    def test_touching_spans_are_merged(self):
        assert merge_spans([s((9, 0), (10, 0)), s((10, 0), (11, 0))]) == [s((9, 0), (11, 0))]

    def test_contained_span_does_not_shrink(self):
        assert merge_spans([s((9, 0), (12, 0)), s((10, 0), (10, 30))]) == [s((9, 0), (12, 0))]


class TestSubtractSpan:
    def test_disjoint_block_keeps_span(self):
        assert subtract_span(s((9, 0), (10, 0)), s((10, 0), (11, 0))) == [s((9, 0), (10, 0))]

    def test_block_covering_span_removes_it(self):
        assert subtract_span(s((9, 0), (10, 0)), s((8, 0), (11, 0))) == []

    def test_block_on_leading_edge_truncates(self):
        assert subtract_span(s((9, 0), (12, 0)), s((8, 0), (10, 0))) == [s((10, 0), (12, 0))]

    def test_block_on_trailing_edge_truncates(self):
        assert subtract_span(s((9, 0), (12, 0)), s((11, 0), (13, 0))) == [s((9, 0), (11, 0))]

    def test_block_inside_splits(self):
        assert subtract_span(s((9, 0), (12, 0)), s((10, 0), (10, 30))) == [
            s((9, 0), (10, 0)),
            s((10, 30), (12, 0)),
        ]

    def test_subtract_many_blocks(self):
        blocks = [s((9, 30), (10, 0)), s((11, 0), (11, 30)), s((13, 0), (14, 0))]
        assert subtract_spans(s((9, 0), (12, 0)), blocks) == [
            s((9, 0), (9, 30)),
            s((10, 0), (11, 0)),
            s((11, 30), (12, 0)),
        ]


def test_overlaps_is_half_open():
    a_start, a_end = s((9, 0), (10, 0))
    b_start, b_end = s((10, 0), (11, 0))
    assert not overlaps(a_start, a_end, b_start, b_end)
    assert overlaps(a_start, a_end, *s((9, 59), (10, 30)))
