"""Tests for header set reconciliation."""
from __future__ import annotations

import itertools

from coin_cards.schema import HeaderSchema, reconcile


HEADERS = ["Subject", "Year", "Value", "Grading"]


class TestReconcile:
    def test_empty_reference_accepts_anything(self):
        assert reconcile([], HEADERS)
        assert reconcile([], [])
        assert reconcile([], ["x"])

    def test_identical_headers(self):
        assert reconcile(HEADERS, list(HEADERS))

    def test_order_independent(self):
        for permutation in itertools.permutations(HEADERS):
            assert reconcile(HEADERS, list(permutation))

    def test_missing_column_rejected(self):
        assert not reconcile(HEADERS, HEADERS[:-1])

    def test_extra_column_rejected_even_with_full_overlap(self):
        assert not reconcile(HEADERS, HEADERS + ["Mint"])

    def test_renamed_column_rejected(self):
        assert not reconcile(HEADERS, ["Subject", "Year", "Value", "Grade"])

    def test_case_sensitive(self):
        assert not reconcile(HEADERS, [h.lower() for h in HEADERS])


class TestHeaderSchema:
    def test_first_admit_establishes_reference(self):
        schema = HeaderSchema()
        assert not schema.is_established

        assert schema.admit(HEADERS)
        assert schema.is_established
        assert schema.headers == HEADERS

    def test_later_admits_are_checked(self):
        schema = HeaderSchema()
        schema.admit(HEADERS)

        assert schema.admit(list(reversed(HEADERS)))
        assert not schema.admit(["a", "b"])
        # Reference unchanged by later admits
        assert schema.headers == HEADERS

    def test_reset_allows_new_schema(self):
        schema = HeaderSchema()
        schema.admit(HEADERS)
        schema.reset()

        assert not schema.is_established
        assert schema.admit(["a", "b"])
        assert schema.headers == ["a", "b"]

    def test_headers_is_a_copy(self):
        schema = HeaderSchema()
        schema.admit(HEADERS)
        schema.headers.append("oops")
        assert schema.headers == HEADERS
