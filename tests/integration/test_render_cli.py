"""Integration tests for the render_resume.py CLI."""

import importlib.util
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

REPO_ROOT = Path(__file__).parent.parent.parent
FIXTURES_PATH = REPO_ROOT / "tests" / "fixtures"
SCRIPT_PATH = REPO_ROOT / "scripts" / "render_resume.py"

runner = CliRunner()


def load_cli():
    spec = importlib.util.spec_from_file_location("render_resume_cli", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def cli(tmp_path, monkeypatch):
    module = load_cli()
    monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
    yield module
    # Sinks added by the CLI point at CliRunner's captured streams
    logger.remove()


@pytest.mark.integration
def test_no_command_shows_help(cli):
    result = runner.invoke(cli.app, [])
    assert result.exit_code == 0
    assert "render" in result.output
    assert "validate" in result.output


@pytest.mark.integration
def test_render_writes_pdf(cli, tmp_path):
    output_dir = tmp_path / "out"
    result = runner.invoke(
        cli.app, ["render", str(FIXTURES_PATH / "jane_doe.json"), "-o", str(output_dir), "-v"]
    )

    assert result.exit_code == 0, result.output
    assert "Rendering succeeded" in result.output
    assert "Pages:" in result.output
    assert (output_dir / "Jane Doe_Resume.pdf").read_bytes().startswith(b"%PDF")
    assert list((tmp_path / "logs").glob("render_*/render.log"))


@pytest.mark.integration
def test_render_two_column_with_presets(cli, tmp_path):
    output_dir = tmp_path / "out"
    result = runner.invoke(
        cli.app,
        [
            "render",
            str(FIXTURES_PATH / "minimal.yaml"),
            "--layout",
            "two-column",
            "-p",
            "palette_slate",
            "-p",
            "spacing_compact",
            "-o",
            str(output_dir),
        ],
    )

    assert result.exit_code == 0, result.output
    assert (output_dir / "Jane Doe_TwoColumn_Resume.pdf").exists()


@pytest.mark.integration
def test_render_preview(cli):
    result = runner.invoke(cli.app, ["render", str(FIXTURES_PATH / "minimal.yaml"), "--preview"])

    assert result.exit_code == 0, result.output
    assert result.output.strip().startswith("data:application/pdf;base64,")


@pytest.mark.integration
@pytest.mark.parametrize(
    "args, message",
    [
        (["--layout", "grid"], "Unknown layout"),
        (["-p", "palette_neon"], "palette_neon"),
    ],
)
def test_render_invalid_options(cli, tmp_path, args, message):
    result = runner.invoke(
        cli.app,
        ["render", str(FIXTURES_PATH / "minimal.yaml"), "-o", str(tmp_path), *args],
    )

    assert result.exit_code == 1
    assert message in result.output


@pytest.mark.integration
def test_render_missing_input(cli, tmp_path):
    result = runner.invoke(cli.app, ["render", str(tmp_path / "missing.json")])

    assert result.exit_code == 1
    assert "not found" in result.output


@pytest.mark.integration
def test_render_malformed_input(cli, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"skills": "SQL"}')

    result = runner.invoke(cli.app, ["render", str(bad), "-o", str(tmp_path)])

    assert result.exit_code == 1
    assert "'skills' must be a list" in result.output


@pytest.mark.integration
def test_validate_and_inspect(cli, tmp_path):
    data_path = FIXTURES_PATH / "jane_doe.json"
    output_dir = tmp_path / "out"
    runner.invoke(cli.app, ["render", str(data_path), "-l", "two-column", "-o", str(output_dir)])
    pdf_path = output_dir / "Jane Doe_TwoColumn_Resume.pdf"

    validated = runner.invoke(cli.app, ["validate", str(data_path), str(pdf_path), "-l", "two-column"])
    assert validated.exit_code == 0, validated.output
    assert "Validation passed" in validated.output

    # Rendered from the full resume, checked against a smaller one
    mismatched = runner.invoke(
        cli.app, ["validate", str(FIXTURES_PATH / "minimal.yaml"), str(pdf_path), "-l", "two-column"]
    )
    assert mismatched.exit_code == 1
    assert "Validation failed" in mismatched.output

    inspected = runner.invoke(cli.app, ["inspect", str(pdf_path), "--columns", "0.3238"])
    assert inspected.exit_code == 0, inspected.output
    assert "page(s)" in inspected.output
    assert "Page 1, column 0" in inspected.output
    assert "SKILLS" in inspected.output


@pytest.mark.integration
def test_inspect_missing_pdf(cli, tmp_path):
    result = runner.invoke(cli.app, ["inspect", str(tmp_path / "missing.pdf")])
    assert result.exit_code == 1
