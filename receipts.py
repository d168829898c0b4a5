"""
receipts.py - Receipt Foundation Module

Canonical emit_receipt() for the OGP gap checker. ALL modules import from here.
This is the single source of truth for receipt emission and the StopRule base.

Never single hash. Always dual_hash (SHA256:BLAKE3).
"""

import hashlib
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

import blake3

__all__ = [
    "dual_hash",
    "emit_receipt",
    "write_receipt_jsonl",
    "StopRule",
    "merkle",
    "emit_anomaly",
    "RECEIPT_SCHEMA",
    "DEFAULT_TENANT",
]

# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_TENANT = "ogp"

RECEIPT_SCHEMA = {
    "receipt_type": "str",
    "ts": "ISO8601",
    "tenant_id": "str",
    "payload_hash": "str (SHA256:BLAKE3)",
}


# =============================================================================
# CORE FUNCTION 1: dual_hash
# =============================================================================

def dual_hash(data: Union[bytes, str]) -> str:
    """
    SHA256:BLAKE3 of the given payload.

    Args:
        data: Bytes or string to hash

    Returns:
        str: "sha256_hex:blake3_hex" format
    """
    if isinstance(data, str):
        data = data.encode()
    sha = hashlib.sha256(data).hexdigest()
    b3 = blake3.blake3(data).hexdigest()
    return f"{sha}:{b3}"


# =============================================================================
# CORE FUNCTION 2: emit_receipt
# =============================================================================

def emit_receipt(receipt_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build a receipt for one computation.

    The payload hash covers the payload only, so two receipts for identical
    inputs share a payload_hash even though their timestamps differ.

    Args:
        receipt_type: Type identifier for this receipt
        data: Receipt payload (tenant_id defaults to DEFAULT_TENANT)

    Returns:
        dict: Complete receipt with ts, tenant_id, payload_hash, and data fields
    """
    receipt = {
        "receipt_type": receipt_type,
        "ts": datetime.now(timezone.utc).isoformat(),
        "tenant_id": data.get("tenant_id", DEFAULT_TENANT),
        "payload_hash": dual_hash(json.dumps(data, sort_keys=True)),
        **data
    }
    return receipt


# =============================================================================
# CORE FUNCTION 3: write_receipt_jsonl
# =============================================================================

def write_receipt_jsonl(receipt: Dict[str, Any], fh) -> None:
    """Append receipt as single JSON line to an open file handle."""
    line = json.dumps(receipt, separators=(",", ":"))
    fh.write(line + "\n")


# =============================================================================
# CORE FUNCTION 4: merkle
# =============================================================================

def merkle(items: List[Any]) -> str:
    """
    Compute Merkle root of items.

    Args:
        items: List of items to merkle (will be JSON serialized)

    Returns:
        str: Merkle root hash in dual_hash format
    """
    if not items:
        return dual_hash(b"empty")
    hashes = [dual_hash(json.dumps(i, sort_keys=True)) for i in items]
    while len(hashes) > 1:
        if len(hashes) % 2:
            hashes.append(hashes[-1])
        hashes = [dual_hash(hashes[i] + hashes[i + 1])
                  for i in range(0, len(hashes), 2)]
    return hashes[0]


# =============================================================================
# CORE FUNCTION 5: emit_anomaly
# =============================================================================

def emit_anomaly(metric: str, classification: str, detail: str,
                 **fields: Any) -> Dict[str, Any]:
    """
    Emit the anomaly receipt that precedes every StopRule.

    Args:
        metric: What was being checked (e.g. "alpha", "path_step_bound")
        classification: Error class name raised after this receipt
        detail: Human-readable message
        **fields: Extra JSON-serializable context

    Returns:
        dict: anomaly receipt with action "halt"
    """
    return emit_receipt("anomaly", {
        "tenant_id": DEFAULT_TENANT,
        "metric": metric,
        "classification": classification,
        "detail": detail,
        "action": "halt",
        **fields,
    })


# =============================================================================
# STOPRULE EXCEPTION
# =============================================================================

class StopRule(Exception):
    """Raised when a stoprule triggers. Never catch silently."""
    pass
