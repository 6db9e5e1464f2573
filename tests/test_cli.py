"""Tests for CLI."""

import json
import shutil
from pathlib import Path

from typer.testing import CliRunner

from docnav.cli import app

runner = CliRunner()
FIXTURES = Path(__file__).parent / "fixtures"


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "build" in result.output
    assert "init" in result.output
    assert "validate" in result.output


def test_cli_no_args_shows_help():
    result = runner.invoke(app, [])
    # Typer exits with 2 when showing help for a group without a command
    assert result.exit_code in (0, 2)
    assert "Usage" in result.output


def test_cli_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.startswith("docnav ")


def test_build_help():
    result = runner.invoke(app, ["build", "--help"])
    assert result.exit_code == 0
    assert "--doclets" in result.output


def test_build_missing_config():
    result = runner.invoke(app, ["build", "--config", "/nonexistent/jsdoc.json"])
    assert result.exit_code == 1
    assert "Config file not found" in result.output


def test_build_missing_doclets():
    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(FIXTURES / "jsdoc.json"),
            "--doclets",
            "/nonexistent/doclets.json",
        ],
    )
    assert result.exit_code == 1
    assert "Doclet file not found" in result.output
    assert "jsdoc -X" in result.output


def test_build_invalid_doclets(tmp_path: Path):
    doclets = tmp_path / "doclets.json"
    doclets.write_text('{"kind": "class"}', encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(FIXTURES / "jsdoc.json"),
            "--doclets",
            str(doclets),
            "--output-dir",
            str(tmp_path / "out"),
        ],
    )
    assert result.exit_code == 1
    assert "Error loading doclets" in result.output


def test_build_invalid_config(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("theme_opts:\n  sections: [Widgets]\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(config),
            "--doclets",
            str(FIXTURES / "doclets.json"),
        ],
    )
    assert result.exit_code == 1
    assert "Error loading config" in result.output


def test_build_success(tmp_path: Path):
    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(FIXTURES / "jsdoc.json"),
            "--doclets",
            str(FIXTURES / "doclets.json"),
            "--output-dir",
            str(tmp_path),
        ],
    )

    assert result.exit_code == 0
    assert "Generated" in result.output
    assert "10 sidebar sections" in result.output
    assert "21 search entries" in result.output
    assert (tmp_path / "data" / "sidebar.json").exists()
    assert (tmp_path / "data" / "search.json").exists()


def test_build_uses_destination_from_config(tmp_path: Path):
    shutil.copytree(FIXTURES, tmp_path / "project")
    project = tmp_path / "project"

    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(project / "jsdoc.json"),
            "--doclets",
            str(project / "doclets.json"),
        ],
    )

    assert result.exit_code == 0
    sidebar = json.loads(
        (project / "out" / "data" / "sidebar.json").read_text(encoding="utf-8")
    )
    assert sidebar["title"] == "Worldcore"


def test_build_dry_run(tmp_path: Path):
    """Test --dry-run flag doesn't write files."""
    output_dir = tmp_path / "output"

    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(FIXTURES / "jsdoc.json"),
            "--doclets",
            str(FIXTURES / "doclets.json"),
            "--output-dir",
            str(output_dir),
            "--dry-run",
        ],
    )

    assert result.exit_code == 0
    assert "Would generate" in result.output
    assert not output_dir.exists()


def test_build_quiet(tmp_path: Path):
    """Test --quiet flag suppresses output."""
    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(FIXTURES / "jsdoc.json"),
            "--doclets",
            str(FIXTURES / "doclets.json"),
            "--output-dir",
            str(tmp_path),
            "--quiet",
        ],
    )

    assert result.exit_code == 0
    assert result.output.strip() == ""
    assert (tmp_path / "data" / "sidebar.json").exists()


def test_build_quiet_failure():
    result = runner.invoke(
        app, ["build", "--config", "/nonexistent/jsdoc.json", "--quiet"]
    )

    assert result.exit_code == 1
    assert result.output.strip() == ""


def test_build_verbose(tmp_path: Path):
    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(FIXTURES / "jsdoc.json"),
            "--doclets",
            str(FIXTURES / "doclets.json"),
            "--output-dir",
            str(tmp_path),
            "--verbose",
        ],
    )

    assert result.exit_code == 0
    assert "Title: Worldcore" in result.output
    assert "Doclets: 20" in result.output
    assert "Classes: 2 items" in result.output


def test_build_reports_warnings(tmp_path: Path):
    doclets = tmp_path / "doclets.json"
    doclets.write_text(
        json.dumps([{"kind": "class", "longname": "A", "name": "A"}, "junk"]),
        encoding="utf-8",
    )
    config = tmp_path / "jsdoc.yml"
    config.write_text("opts:\n  tutorials: ./missing\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "build",
            "--config",
            str(config),
            "--doclets",
            str(doclets),
            "--output-dir",
            str(tmp_path / "out"),
        ],
    )

    assert result.exit_code == 0
    assert "Warnings:" in result.output
    assert "Skipping doclet #1" in result.output
    assert "Tutorials directory not found" in result.output


# =============================================================================
# init
# =============================================================================


def test_init_missing_config():
    result = runner.invoke(app, ["init", "--config", "/nonexistent/jsdoc.yml"])
    assert result.exit_code == 1
    assert "not found" in result.output.lower()


def test_init_adds_theme_opts(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("source:\n  include: [src]\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config)])

    assert result.exit_code == 0
    assert "Added theme_opts" in result.output

    content = config.read_text(encoding="utf-8")
    assert "opts:" in content
    assert "theme_opts:" in content
    assert "include: [src]" in content


def test_init_keeps_existing_opts(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("opts:\n  destination: ./site/\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config)])

    assert result.exit_code == 0
    content = config.read_text(encoding="utf-8")
    assert "destination: ./site/" in content
    assert "theme_opts:" in content


def test_init_handles_empty_file(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config)])

    assert result.exit_code == 0
    assert "theme_opts:" in config.read_text(encoding="utf-8")


def test_init_errors_if_theme_opts_exists(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("opts:\n  theme_opts:\n    title: Mine\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config)])

    assert result.exit_code == 1
    assert "already configured" in result.output
    assert "title: Mine" in config.read_text(encoding="utf-8")


def test_init_force_overwrites(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("opts:\n  theme_opts:\n    title: Mine\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config), "--force"])

    assert result.exit_code == 0
    assert "title: Mine" not in config.read_text(encoding="utf-8")


def test_init_rejects_non_mapping_opts(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("opts: [a, b]\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config)])

    assert result.exit_code == 1
    assert "'opts' must be a mapping" in result.output


def test_init_includes_commented_example(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("source:\n  include: [src]\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config)])

    assert result.exit_code == 0
    content = config.read_text(encoding="utf-8")
    assert "    # title: My Project" in content
    assert "#     path: docs/guides" in content


def test_init_handles_flow_style_config(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text('{"opts": {"destination": "./site/"}}\n', encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config)])

    assert result.exit_code == 0
    content = config.read_text(encoding="utf-8")
    assert "# title: My Project" in content
    assert "./site/" in content

    validated = runner.invoke(app, ["validate", "--config", str(config), "-v"])
    assert validated.exit_code == 0
    assert "site" in validated.output


def test_init_result_validates(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("source:\n  include: [src]\n", encoding="utf-8")

    runner.invoke(app, ["init", "--config", str(config)])
    result = runner.invoke(app, ["validate", "--config", str(config)])

    assert result.exit_code == 0
    assert "Config valid" in result.output


def test_init_quiet_success(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("source:\n  include: [src]\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config), "--quiet"])

    assert result.exit_code == 0
    assert result.output.strip() == ""
    assert "theme_opts:" in config.read_text(encoding="utf-8")


def test_init_verbose(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("source:\n  include: [src]\n", encoding="utf-8")

    result = runner.invoke(app, ["init", "--config", str(config), "--verbose"])

    assert result.exit_code == 0
    assert "commented example" in result.output


# =============================================================================
# validate
# =============================================================================


def test_validate_valid_config():
    result = runner.invoke(
        app, ["validate", "--config", str(FIXTURES / "jsdoc.json")]
    )

    assert result.exit_code == 0
    assert "Config valid" in result.output
    assert "Title: Worldcore" in result.output
    assert "Search: on" in result.output


def test_validate_missing_config():
    result = runner.invoke(app, ["validate", "--config", "/nonexistent/jsdoc.json"])

    assert result.exit_code == 1
    assert "Config invalid" in result.output
    assert "File not found" in result.output


def test_validate_invalid_config(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("theme_opts:\n  search: 'yes'\n", encoding="utf-8")

    result = runner.invoke(app, ["validate", "--config", str(config)])

    assert result.exit_code == 1
    assert "Config invalid" in result.output
    assert "must be a boolean" in result.output


def test_validate_malformed_yaml(tmp_path: Path):
    config = tmp_path / "jsdoc.yml"
    config.write_text("theme_opts: [unclosed\n", encoding="utf-8")

    result = runner.invoke(app, ["validate", "--config", str(config)])

    assert result.exit_code == 1
    assert "Config invalid" in result.output


def test_validate_quiet_failure(tmp_path: Path):
    result = runner.invoke(
        app, ["validate", "--config", "/nonexistent/jsdoc.json", "--quiet"]
    )

    assert result.exit_code == 1
    assert result.output.strip() == ""


def test_validate_verbose():
    result = runner.invoke(
        app, ["validate", "--config", str(FIXTURES / "theme.yml"), "--verbose"]
    )

    assert result.exit_code == 0
    assert "Sections: Classes, Modules, Global" in result.output
    assert "Search: off" in result.output
    assert "Tutorials: -" in result.output
