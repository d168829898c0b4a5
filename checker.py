"""
OGP Gap Checker CLI Harness

CLI tool for the Overlap Gap Property checker on random 3-SAT.
Provides subcommands for:
  - gap: Entropy gap certificate for one (alpha, beta, prob_pair)
  - band: Sweep beta and print the forbidden intervals
  - simulate: Run the stability contradiction simulator on a synthetic scenario
  - validate-config: Validate a CheckerConfig file

Exit codes:
  - 0: success (gap holds / contradiction found / config valid)
  - 1: finding or validation issue (gap fails, stability violated, stoprule)
  - 2: fatal error (missing file, bad input)

Everything printed here is a numerical check, not a proof.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

import config_schema
from receipts import StopRule, emit_receipt
from ogp.band import scan_forbidden_band, default_beta_grid
from ogp.constants import Outcome
from ogp.entropy_gap import compute_gap, literature_bounds
from ogp.export import (
    NOT_A_PROOF, band_scan_to_dict, certificate_to_dict, export_run, report_to_dict,
    write_receipts,
)
from ogp.simulator import run_contradiction_test
from ogp.symbolic import certify_for_all_n
from ogp.solvers import constant_solver, identity_solver, jump_solver
from ogp.types_config import ModelParameters

console = Console()
logger = logging.getLogger(__name__)

SOLVERS = ("identity", "constant", "jump")


def print_success(message: str) -> None:
    """Print a success message with green checkmark."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message with red X."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message with yellow warning sign."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def _load_config(config_path: Optional[str]) -> config_schema.CheckerConfig:
    if config_path:
        return config_schema.load(config_path)
    return config_schema.default()


def _fail(output: str, message: str, code: int, **extra: Any) -> None:
    if output == "json":
        click.echo(json.dumps({"error": message, **extra}))
    else:
        print_error(message)
    sys.exit(code)


# =============================================================================
# CLI Group
# =============================================================================

@click.group()
@click.option("--log-level", default="WARNING",
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def cli(log_level: str) -> None:
    """OGP gap checker: entropy gap certificates and stability contradiction runs."""
    logging.basicConfig(level=getattr(logging, log_level.upper()),
                        format="%(levelname)s %(name)s: %(message)s")


# --- gap ---

@cli.command("gap")
@click.option("--config", "-c", "config_path", type=click.Path(), help="CheckerConfig file")
@click.option("--alpha", type=float, help="Clause density")
@click.option("--beta", type=float, help="Overlap fraction")
@click.option("--prob-pair", type=float, help="Explicit pair probability")
@click.option("--digits", type=click.IntRange(min=1), default=None,
              help="Also certify symbolically, slope evaluated to this many digits")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich")
def gap_cmd(config_path: Optional[str], alpha: Optional[float], beta: Optional[float],
            prob_pair: Optional[float], digits: Optional[int], output: str) -> None:
    """Compute the entropy gap certificate."""
    try:
        config = _load_config(config_path)
    except FileNotFoundError:
        _fail(output, f"Config file not found: {config_path}", 2, path=config_path)
    except ValueError as e:
        _fail(output, str(e), 2)

    alpha = config.alpha if alpha is None else alpha
    beta = config.beta if beta is None else beta
    if prob_pair is not None:
        params = ModelParameters(alpha, beta, prob_pair)
    elif config.prob_pair is not None and (alpha, beta) == (config.alpha, config.beta):
        params = ModelParameters(alpha, beta, config.prob_pair)
    else:
        params = ModelParameters.from_density(alpha, beta, config.clause_bias)

    try:
        cert = compute_gap(params)
        pins = literature_bounds(params, cert)
        symbolic = certify_for_all_n(params, digits) if digits else None
    except StopRule as e:
        _fail(output, str(e), 1, type=type(e).__name__)

    holds = cert.holds and (symbolic is None or symbolic["holds"])

    if output == "json":
        payload = {**certificate_to_dict(cert), "literature_bounds": pins, "note": NOT_A_PROOF}
        if symbolic is not None:
            payload["symbolic"] = {
                "digits": digits,
                "linear": symbolic["linear"],
                "zero_intercept": symbolic["zero_intercept"],
                "holds": symbolic["holds"],
                "coefficient": str(symbolic["coefficient"]),
            }
        click.echo(json.dumps(payload, indent=2))
    else:
        table = Table(title="Annealing Entropy")
        table.add_column("Term")
        table.add_column("Value", justify="right")
        table.add_column("Literature pin", justify="right")
        table.add_row("H(beta)", f"{cert.entropy_term:.6f}",
                      f"< {pins['entropy_term_bound']} "
                      + ("✓" if pins["entropy_term_within"] else "✗"))
        table.add_row("log2(prob_pair)", f"{cert.log_prob_term:.6f}",
                      f"< {pins['log_prob_term_bound']} "
                      + ("✓" if pins["log_prob_term_within"] else "✗"))
        table.add_row("coefficient", f"{cert.coefficient:.6f}",
                      f"<= {pins['implied_coefficient_bound']:.4f}")
        if symbolic is not None:
            table.add_row(f"coefficient ({digits} digits)", str(symbolic["coefficient"]),
                          "linear in n, zero intercept "
                          + ("✓" if symbolic["linear"] and symbolic["zero_intercept"] else "✗"))
        console.print(table)
        if holds:
            print_success(f"Gap holds for all n > 0 at beta={params.beta}")
        else:
            print_warning(f"Gap does not hold at beta={params.beta}")
        console.print(f"[dim]{NOT_A_PROOF}[/dim]")
    sys.exit(0 if holds else 1)


# --- band ---

@cli.command("band")
@click.option("--alpha", type=float, default=4.5, show_default=True, help="Clause density")
@click.option("--steps", type=int, default=199, show_default=True, help="Grid points in (0, 1)")
@click.option("--clause-bias", type=float, default=0.1, show_default=True)
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich")
def band_cmd(alpha: float, steps: int, clause_bias: float, output: str) -> None:
    """Sweep beta and list forbidden intervals."""
    try:
        scan = scan_forbidden_band(alpha, default_beta_grid(steps), clause_bias)
    except StopRule as e:
        _fail(output, str(e), 1, type=type(e).__name__)

    if output == "json":
        click.echo(json.dumps(band_scan_to_dict(scan), indent=2))
    else:
        table = Table(title=f"Forbidden overlap intervals (alpha={alpha})")
        table.add_column("#", justify="right")
        table.add_column("beta_lo", justify="right")
        table.add_column("beta_hi", justify="right")
        for i, iv in enumerate(scan.intervals):
            table.add_row(str(i), f"{iv.beta_lo:.4f}", f"{iv.beta_hi:.4f}")
        console.print(table)
        if scan.has_gap:
            print_success(f"{len(scan.intervals)} forbidden interval(s) on {len(scan.betas)} grid points")
        else:
            print_warning("No forbidden interval on this grid")
    sys.exit(0 if scan.has_gap else 1)


# --- simulate ---

@cli.command("simulate")
@click.option("--config", "-c", "config_path", type=click.Path(), help="CheckerConfig file")
@click.option("--n", "n", type=int, help="Problem size")
@click.option("--start-distance", type=float, help="Distance between endpoints")
@click.option("--seed", type=int, help="Scenario seed")
@click.option("--solver", type=click.Choice(SOLVERS), default="identity", show_default=True)
@click.option("--switch-fraction", type=float, default=0.5, show_default=True,
              help="Where the jump solver switches, as a fraction of the path")
@click.option("--export", "-e", "export_path", type=click.Path(), help="Write run JSON")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich")
def simulate_cmd(config_path: Optional[str], n: Optional[int], start_distance: Optional[float],
                 seed: Optional[int], solver: str, switch_fraction: float,
                 export_path: Optional[str], output: str) -> None:
    """Run the stability contradiction simulator on a synthetic scenario."""
    try:
        config = _load_config(config_path)
    except FileNotFoundError:
        _fail(output, f"Config file not found: {config_path}", 2, path=config_path)
    except ValueError as e:
        _fail(output, str(e), 2)

    overrides: Dict[str, Any] = {}
    if n is not None:
        overrides["n"] = n
    if start_distance is not None:
        overrides["start_distance"] = start_distance
    if seed is not None:
        overrides["seed"] = seed
    if overrides:
        try:
            config = config_schema.from_dict({**config.to_dict(), **overrides})
        except ValueError as e:
            _fail(output, str(e), 2)

    try:
        scenario = config.scenario()
        if solver == "identity":
            candidate = identity_solver
        elif solver == "constant":
            candidate = constant_solver(scenario.start)
        else:
            switch = max(1, int(round(switch_fraction * scenario.path.k)))
            candidate = jump_solver(scenario.start, scenario.end, scenario.path, switch)
        report = run_contradiction_test(scenario.n, scenario.start, scenario.end,
                                        scenario.path, candidate, config.thresholds())
    except StopRule as e:
        _fail(output, str(e), 1, type=type(e).__name__)

    run = export_run(report=report, output_path=export_path)

    if output == "json":
        click.echo(json.dumps({**report_to_dict(report), "dual_hash": run["dual_hash"],
                               "config_hash": config.config_hash}, indent=2))
    else:
        style = "green" if report.found else "yellow"
        lines = [
            f"n={scenario.n}  k={scenario.path.k}  solver={solver}  seed={scenario.seed}",
            f"Outcome: {report.outcome.value}",
            f"Stage: {report.stage.value}",
        ]
        if report.index is not None:
            lines.append(f"Index: {report.index}   f(index): {report.distance:.4f}")
        if report.detail:
            lines.append(report.detail)
        console.print(Panel("\n".join(lines),
                            title=f"[bold {style}]Contradiction Test[/bold {style}]",
                            border_style=style))
        console.print(f"[dim]{NOT_A_PROOF}[/dim]")
    sys.exit(0 if report.outcome is Outcome.CONTRADICTION_FOUND else 1)


# --- validate-config ---

@cli.command("validate-config")
@click.argument("config_path", type=click.Path(exists=True))
@click.option("--receipts", "receipts_path", type=click.Path(), help="Append receipt JSONL")
@click.option("--output", "-o", type=click.Choice(["rich", "json"]), default="rich")
def validate_config_cmd(config_path: str, receipts_path: Optional[str], output: str) -> None:
    """Validate a CheckerConfig file."""
    try:
        config = config_schema.load(config_path)
        is_valid, errors = True, []
    except ValueError as ve:
        config, is_valid, errors = None, False, [str(ve)]

    receipt = emit_receipt("config_validation", {
        "tenant_id": "ogp",
        "path": config_path,
        "valid": is_valid,
        "config_hash": config.config_hash if config else None,
    })
    if receipts_path:
        write_receipts(receipts_path, [receipt])

    if output == "json":
        click.echo(json.dumps({
            "path": config_path,
            "valid": is_valid,
            "errors": errors,
            "config": config.to_dict() if config else None,
        }, indent=2))
    else:
        status = "PASSED" if is_valid else "FAILED"
        style = "green" if is_valid else "red"
        if config:
            content = (
                f"File: {config_path}\n"
                f"alpha: {config.alpha}   beta: {config.beta}   n: {config.n}\n"
                f"band: [{config.low_band}, {config.high_band}]   step_bound: {config.step_bound}\n"
                f"hash: {config.config_hash}"
            )
        else:
            content = "\n".join([f"File: {config_path}", ""] +
                                [f"[red]✗[/red] {e}" for e in errors])
        console.print(Panel(content,
                            title=f"[bold {style}]Config Validation: {status}[/bold {style}]",
                            border_style=style))
    sys.exit(0 if is_valid else 1)


# --- entry point ---

def main() -> int:
    """Entry point for the ogp-check console script."""
    try:
        cli(standalone_mode=False)
        return 0
    except click.ClickException as e:
        e.show()
        return 2
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
