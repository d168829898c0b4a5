"""
tests/test_receipts.py - Tests for receipts.py

Every test has assert statements.
"""

import io
import json

import pytest

from receipts import (
    DEFAULT_TENANT,
    StopRule,
    dual_hash,
    emit_anomaly,
    emit_receipt,
    merkle,
    write_receipt_jsonl,
)


class TestDualHash:
    """Tests for dual_hash."""

    def test_format_is_two_hex_digests(self):
        """dual_hash returns sha256:blake3, both 64 hex chars."""
        h = dual_hash("gap")
        sha, b3 = h.split(":")
        assert len(sha) == 64 and len(b3) == 64
        int(sha, 16)
        int(b3, 16)

    def test_str_and_bytes_agree(self):
        """String input is hashed as its UTF-8 bytes."""
        assert dual_hash("abc") == dual_hash(b"abc")

    def test_halves_differ(self):
        """SHA256 and BLAKE3 halves are different digests."""
        sha, b3 = dual_hash(b"x").split(":")
        assert sha != b3


class TestEmitReceipt:
    """Tests for emit_receipt."""

    def test_required_fields(self):
        """Receipt carries type, ts, tenant and payload hash."""
        r = emit_receipt("gap_certificate", {"coefficient": -0.1})
        for key in ("receipt_type", "ts", "tenant_id", "payload_hash", "coefficient"):
            assert key in r, f"Missing {key}"
        assert r["receipt_type"] == "gap_certificate"
        assert r["tenant_id"] == DEFAULT_TENANT

    def test_payload_hash_is_deterministic(self):
        """Same payload, same payload_hash, even at different timestamps."""
        a = emit_receipt("x", {"tenant_id": "t", "v": 1})
        b = emit_receipt("x", {"tenant_id": "t", "v": 1})
        assert a["payload_hash"] == b["payload_hash"]

    def test_payload_hash_changes_with_payload(self):
        a = emit_receipt("x", {"v": 1})
        b = emit_receipt("x", {"v": 2})
        assert a["payload_hash"] != b["payload_hash"]


class TestEmitAnomaly:
    """Tests for emit_anomaly."""

    def test_anomaly_fields(self):
        r = emit_anomaly("alpha", "ParameterDomainError", "alpha=0 violates alpha > 0", value=0)
        assert r["receipt_type"] == "anomaly"
        assert r["action"] == "halt"
        assert r["metric"] == "alpha"
        assert r["classification"] == "ParameterDomainError"
        assert r["value"] == 0


class TestMerkle:
    """Tests for merkle."""

    def test_empty(self):
        assert merkle([]) == dual_hash(b"empty")

    def test_single_item_is_its_hash(self):
        assert merkle([{"a": 1}]) == dual_hash(json.dumps({"a": 1}, sort_keys=True))

    def test_order_matters(self):
        assert merkle([1, 2, 3]) != merkle([3, 2, 1])

    def test_odd_count_is_stable(self):
        assert merkle([1, 2, 3]) == merkle([1, 2, 3])


class TestWriteReceiptJsonl:
    """Tests for write_receipt_jsonl."""

    def test_one_line_per_receipt(self):
        fh = io.StringIO()
        write_receipt_jsonl({"receipt_type": "a"}, fh)
        write_receipt_jsonl({"receipt_type": "b"}, fh)
        lines = fh.getvalue().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[1])["receipt_type"] == "b"


class TestStopRule:
    """StopRule is an Exception."""

    def test_is_exception(self):
        with pytest.raises(StopRule):
            raise StopRule("halt")
