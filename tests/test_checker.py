"""
Tests for checker.py CLI harness.

Uses click.testing.CliRunner to invoke commands. JSON output is parsed from
stdout; --log-level ERROR keeps stoprule warnings out of the stream.
"""

import json

import pytest
from click.testing import CliRunner

from checker import cli


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, *args):
    return runner.invoke(cli, ["--log-level", "ERROR", *args])


class TestGapCommand:
    """ogp-check gap"""

    def test_literature_holds(self, runner):
        result = invoke(runner, "gap", "-o", "json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["holds"] is True
        assert data["coefficient"] < 0
        assert data["literature_bounds"]["entropy_term_within"] is True
        assert "not a proof" in data["note"]

    def test_low_density_fails(self, runner):
        result = invoke(runner, "gap", "--alpha", "1", "-o", "json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["holds"] is False

    def test_domain_error(self, runner):
        result = invoke(runner, "gap", "--beta", "0", "-o", "json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["type"] == "ParameterDomainError"

    def test_explicit_prob_pair(self, runner):
        result = invoke(runner, "gap", "--alpha", "2", "--beta", "0.5",
                        "--prob-pair", "0.5", "-o", "json")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["coefficient"] == pytest.approx(-1.0)

    def test_rich_output(self, runner):
        result = invoke(runner, "gap")
        assert result.exit_code == 0
        assert "Gap holds" in result.output

    def test_missing_config(self, runner, tmp_path):
        result = invoke(runner, "gap", "--config", str(tmp_path / "none.yaml"), "-o", "json")
        assert result.exit_code == 2

    def test_config_file(self, runner, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("alpha: 1.0\n")
        result = invoke(runner, "gap", "--config", str(path), "-o", "json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["params"]["alpha"] == 1.0


class TestGapSymbolic:
    """ogp-check gap --digits"""

    def test_symbolic_certificate(self, runner):
        result = invoke(runner, "gap", "--digits", "30", "-o", "json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["symbolic"]["holds"] is True
        assert data["symbolic"]["linear"] is True
        assert data["symbolic"]["digits"] == 30
        assert float(data["symbolic"]["coefficient"]) == pytest.approx(data["coefficient"], abs=1e-12)

    def test_symbolic_low_density(self, runner):
        result = invoke(runner, "gap", "--alpha", "1", "--digits", "20", "-o", "json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["symbolic"]["holds"] is False

    def test_no_symbolic_by_default(self, runner):
        result = invoke(runner, "gap", "-o", "json")
        assert "symbolic" not in json.loads(result.stdout)

    def test_digits_must_be_positive(self, runner):
        result = invoke(runner, "gap", "--digits", "0")
        assert result.exit_code == 2

    def test_rich_output_with_digits(self, runner):
        result = invoke(runner, "gap", "--digits", "25")
        assert result.exit_code == 0
        assert "Gap holds" in result.output

    def test_one_certificate_per_call(self, runner, monkeypatch):
        import ogp.entropy_gap as entropy_gap
        emitted = []
        monkeypatch.setattr(entropy_gap, "emit_gap_certificate_receipt",
                            lambda cert, tenant_id="ogp": emitted.append(cert))
        result = invoke(runner, "gap", "-o", "json")
        assert result.exit_code == 0
        assert len(emitted) == 1


class TestBandCommand:
    """ogp-check band"""

    def test_default(self, runner):
        result = invoke(runner, "band", "-o", "json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["has_gap"] is True
        assert data["n_points"] == 199

    def test_no_gap(self, runner):
        result = invoke(runner, "band", "--alpha", "0.1", "-o", "json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["intervals"] == []

    def test_bad_alpha(self, runner):
        result = invoke(runner, "band", "--alpha", "0", "-o", "json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["type"] == "ParameterDomainError"


class TestSimulateCommand:
    """ogp-check simulate"""

    def test_identity_finds_contradiction(self, runner):
        result = invoke(runner, "simulate", "-o", "json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["outcome"] == "CONTRADICTION_FOUND"
        assert data["index"] == 10
        assert data["distance"] == pytest.approx(0.1)
        assert ":" in data["dual_hash"]

    def test_jump_solver(self, runner):
        result = invoke(runner, "simulate", "--solver", "jump", "-o", "json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["outcome"] == "STABILITY_VIOLATED"

    def test_constant_solver(self, runner):
        result = invoke(runner, "simulate", "--solver", "constant", "-o", "json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["type"] == "BoundaryConditionNotMet"

    def test_close_endpoints(self, runner):
        result = invoke(runner, "simulate", "--start-distance", "0.3", "-o", "json")
        assert result.exit_code == 1
        assert json.loads(result.stdout)["type"] == "InvariantViolation"

    def test_bad_override(self, runner):
        result = invoke(runner, "simulate", "--n", "0", "-o", "json")
        assert result.exit_code == 2

    def test_export(self, runner, tmp_path):
        out = tmp_path / "run.json"
        result = invoke(runner, "simulate", "--n", "50", "--export", str(out), "-o", "json")
        assert result.exit_code == 0
        assert json.loads(out.read_text())["dual_hash"] == json.loads(result.stdout)["dual_hash"]

    def test_rich_output(self, runner):
        result = invoke(runner, "simulate")
        assert result.exit_code == 0
        assert "CONTRADICTION_FOUND" in result.output


class TestValidateConfigCommand:
    """ogp-check validate-config"""

    def test_valid(self, runner, tmp_path):
        path = tmp_path / "ok.yaml"
        path.write_text("alpha: 4.5\nbeta: 0.3\n")
        result = invoke(runner, "validate-config", str(path), "-o", "json")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["valid"] is True

    def test_invalid(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("beta: 2\n")
        result = invoke(runner, "validate-config", str(path), "-o", "json")
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["valid"] is False
        assert data["errors"]

    def test_receipts_written(self, runner, tmp_path):
        path = tmp_path / "ok.yaml"
        path.write_text("n: 64\n")
        receipts = tmp_path / "r.jsonl"
        result = invoke(runner, "validate-config", str(path), "--receipts", str(receipts))
        assert result.exit_code == 0
        line = json.loads(receipts.read_text().splitlines()[0])
        assert line["receipt_type"] == "config_validation"
        assert line["valid"] is True

    def test_missing_file(self, runner, tmp_path):
        result = invoke(runner, "validate-config", str(tmp_path / "none.yaml"))
        assert result.exit_code == 2
