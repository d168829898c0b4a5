"""
ogp/export.py - Serialization and Reports

JSON-ready dicts for certificates, band scans and contradiction reports,
human-readable summaries, and a hashed run export.
"""

import json
from typing import Any, Dict, Iterable, Optional

from receipts import dual_hash, emit_receipt, write_receipt_jsonl

from .band import BandScan
from .constants import Outcome
from .types_result import ContradictionReport, GapCertificate

NOT_A_PROOF = "numerical check only; not a proof"


def certificate_to_dict(cert: GapCertificate) -> Dict[str, Any]:
    return {
        "holds": cert.holds,
        "coefficient": cert.coefficient,
        "entropy_term": cert.entropy_term,
        "log_prob_term": cert.log_prob_term,
        "params": {
            "alpha": cert.params.alpha,
            "beta": cert.params.beta,
            "prob_pair": cert.params.prob_pair,
        },
    }


def report_to_dict(report: ContradictionReport) -> Dict[str, Any]:
    return {
        "outcome": report.outcome.value,
        "found": report.found,
        "index": report.index,
        "distance": report.distance,
        "stage": report.stage.value,
        "detail": report.detail,
        "oracle_rejections": list(report.oracle_rejections),
        "trace": list(report.trace),
    }


def band_scan_to_dict(scan: BandScan) -> Dict[str, Any]:
    return {
        "alpha": scan.alpha,
        "clause_bias": scan.clause_bias,
        "n_points": len(scan.betas),
        "has_gap": scan.has_gap,
        "intervals": [[iv.beta_lo, iv.beta_hi] for iv in scan.intervals],
    }


def generate_report(cert: Optional[GapCertificate] = None,
                    report: Optional[ContradictionReport] = None) -> str:
    """
    Human-readable summary of a certificate and/or a contradiction report.

    Returns:
        str: Report text
    """
    lines = ["=== OGP GAP CHECK ==="]
    if cert is not None:
        lines += [
            f"alpha={cert.params.alpha} beta={cert.params.beta} "
            f"prob_pair={cert.params.prob_pair:.6f}",
            f"H(beta)           = {cert.entropy_term:.6f}",
            f"log2(prob_pair)   = {cert.log_prob_term:.6f}",
            f"coefficient       = {cert.coefficient:.6f}",
            "Gap: " + ("HOLDS" if cert.holds else "DOES NOT HOLD"),
        ]
    if report is not None:
        if cert is not None:
            lines.append("")
        lines += [
            f"Outcome: {report.outcome.value}",
            f"Stage: {report.stage.value}",
            f"Path length: {len(report.trace)}",
        ]
        if report.index is not None:
            lines.append(f"Index: {report.index}  f(index)={report.distance:.6f}")
        if report.detail:
            lines.append(f"Detail: {report.detail}")
        if report.outcome is Outcome.CONTRADICTION_FOUND:
            lines.append("The stable solver was driven into the forbidden band.")
    lines += ["", f"({NOT_A_PROOF})"]
    return "\n".join(lines)


def export_run(cert: Optional[GapCertificate] = None,
               report: Optional[ContradictionReport] = None,
               output_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Export a run as a dict carrying its own dual_hash.

    Args:
        cert: GapCertificate, if computed
        report: ContradictionReport, if run
        output_path: Optional file path to write JSON export

    Returns:
        dict with certificate, report, note and dual_hash
    """
    run = {
        "certificate": certificate_to_dict(cert) if cert is not None else None,
        "report": report_to_dict(report) if report is not None else None,
        "note": NOT_A_PROOF,
    }
    run["dual_hash"] = dual_hash(json.dumps(run, sort_keys=True))

    if output_path:
        with open(output_path, "w") as f:
            json.dump(run, f, indent=2)

    emit_receipt("run_export", {
        "tenant_id": "ogp",
        "dual_hash": run["dual_hash"],
        "output_path": output_path,
    })
    return run


def write_receipts(path: str, receipts: Iterable[Dict[str, Any]]) -> int:
    """Append receipts to a JSONL file. Returns the number written."""
    count = 0
    with open(path, "a") as fh:
        for receipt in receipts:
            write_receipt_jsonl(receipt, fh)
            count += 1
    return count
