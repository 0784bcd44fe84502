"""Tests for CBOMMerger."""

from __future__ import annotations

from cbom_scanner.merger import CBOMMerger, merge
from cbom_scanner.models.cbom import CBOM


class TestMerge:
    def test_union_of_disjoint_keys(self, make_record):
        a = CBOM.from_records([make_record("AES", "A.java")])
        b = CBOM.from_records([make_record("SHA-256", "b.py", primitive="hash")])
        merged = merge(a, b)
        assert set(merged.keys()) == set(a.keys()) | set(b.keys())
        assert len(merged) == 2

    def test_keyset_is_commutative(self, make_record):
        a = CBOM.from_records([make_record("AES", "A.java"), make_record("RSA", "A.java", line=2)])
        b = CBOM.from_records([make_record("AES", "A.java"), make_record("MD5", "c.go", line=9)])
        assert set(merge(a, b).keys()) == set(merge(b, a).keys())

    def test_merge_is_associative(self, make_record):
        a = CBOM.from_records([make_record("AES", "A.java")])
        b = CBOM.from_records([make_record("AES", "A.java", context="second")])
        c = CBOM.from_records([make_record("DES", "D.java")])
        assert merge(merge(a, b), c) == merge(a, merge(b, c))

    def test_collision_last_write_wins(self, make_record):
        old = make_record("AES", "A.java", context="old")
        new = make_record("AES", "A.java", context="new")
        merged = merge(CBOM.from_records([old]), CBOM.from_records([new]))
        assert len(merged) == 1
        assert merged.get(old.identity_key).detection_context == "new"

    def test_empty_incoming_returns_equal_cbom(self, make_record):
        base = CBOM.from_records([make_record("AES", "A.java")])
        merged = merge(base, CBOM.empty())
        assert merged == base
        assert merged is not base

    def test_empty_base(self, make_record):
        incoming = CBOM.from_records([make_record("AES", "A.java")])
        assert merge(CBOM.empty(), incoming) == incoming

    def test_inputs_not_mutated(self, make_record):
        base = CBOM.from_records([make_record("AES", "A.java", context="old")])
        incoming = CBOM.from_records(
            [make_record("AES", "A.java", context="new"), make_record("RC4", "B.java")]
        )
        merge(base, incoming)
        assert len(base) == 1
        assert base.records()[0].detection_context == "old"
        assert len(incoming) == 2

    def test_base_order_preserved(self, make_record):
        base = CBOM.from_records([make_record("AES", "A.java"), make_record("DES", "B.java")])
        incoming = CBOM.from_records([make_record("MD5", "c.go")])
        names = [r.name for r in merge(base, incoming)]
        assert names == ["AES", "DES", "MD5"]


class TestMergeAll:
    def test_empty_sequence(self):
        assert len(CBOMMerger.merge_all([])) == 0

    def test_single_fragment_returned_as_is(self, make_record):
        only = CBOM.from_records([make_record("AES", "A.java")])
        assert CBOMMerger.merge_all([only]) is only

    def test_folds_left_to_right(self, make_record):
        fragments = [
            CBOM.from_records([make_record("AES", "A.java", context="first")]),
            CBOM.from_records([make_record("AES", "A.java", context="second")]),
            CBOM.from_records([make_record("MD5", "m.go")]),
        ]
        merged = CBOMMerger.merge_all(fragments)
        assert len(merged) == 2
        aes = [r for r in merged if r.name == "AES"][0]
        assert aes.detection_context == "second"
