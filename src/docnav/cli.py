"""Command-line interface."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
import yaml
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from docnav import __version__
from docnav.config import load_config
from docnav.generate import build_docnav_output, write_outputs
from docnav.records import load_records


def _make_logger(
    quiet: bool, verbose: bool = False
) -> tuple[Callable[..., None], Callable[..., None]]:
    """Create log and log_verbose functions for CLI output.

    Args:
        quiet: If True, suppress all output.
        verbose: If True, enable verbose logging (quiet overrides this).

    Returns:
        Tuple of (log, log_verbose) functions.
    """
    effective_verbose = verbose and not quiet

    def log(msg: str, color: str = "green", err: bool = False) -> None:
        if not quiet:
            typer.secho(msg, fg=color, err=err)

    def log_verbose(msg: str, color: str = "green", err: bool = False) -> None:
        if effective_verbose:
            typer.secho(msg, fg=color, err=err)

    return log, log_verbose


def version_callback(value: bool) -> None:
    """Print version and exit if --version flag is set."""
    if value:
        typer.echo(f"docnav {__version__}")
        raise typer.Exit()


app = typer.Typer(
    help="Build sidebar navigation and a search index from JSDoc doclets.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Build sidebar navigation and a search index from JSDoc doclets."""


@app.command()
def build(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to the JSDoc/theme config file"),
    ] = Path("jsdoc.json"),
    doclets: Annotated[
        Path,
        typer.Option("--doclets", "-d", help="Path to `jsdoc -X` JSON output"),
    ] = Path("doclets.json"),
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory (defaults to opts.destination)",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Preview what would be generated without writing files",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed progress"),
    ] = False,
) -> None:
    """Generate data/sidebar.json and data/search.json from doclets."""
    log, log_verbose = _make_logger(quiet, verbose)

    if not config.exists():
        log(f"Error: Config file not found: {config}", color="red", err=True)
        raise typer.Exit(1)

    if not doclets.exists():
        log(f"Error: Doclet file not found: {doclets}", color="red", err=True)
        log(
            "Hint: Run 'jsdoc -X <sources> > doclets.json' first.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    try:
        cfg = load_config(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        log(f"Error loading config: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    try:
        records, load_warnings = load_records(doclets)
    except (FileNotFoundError, ValueError) as e:
        log(f"Error loading doclets: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    out_dir = output_dir or cfg.destination

    log_verbose(f"Title: {cfg.title}")
    log_verbose(f"Doclets: {len(records)}")
    log_verbose(f"Section order: {', '.join(cfg.sections)}")
    if dry_run:
        log_verbose("Dry run - no files will be written")

    result = build_docnav_output(config=cfg, records=records)
    try:
        output_files = write_outputs(result, output_dir=out_dir, dry_run=dry_run)
    except OSError as exc:
        log(f"Error writing output files: {exc}", color="red", err=True)
        raise typer.Exit(1) from None

    if dry_run:
        action = "Would generate"
        color = "yellow"
    else:
        action = "Generated"
        color = "green"

    for path in output_files:
        log(f"{action} {path}", color)
    log(
        f"{len(result.sidebar.sections)} sidebar sections, "
        f"{sum(len(s.items) for s in result.sidebar.sections)} items",
        color,
    )
    if result.search is not None:
        log(f"{len(result.search['list'])} search entries", color)
    else:
        log_verbose("Search disabled - no search index written", color="yellow")

    for section in result.sidebar.sections:
        log_verbose(f"  {section.name}: {len(section.items)} items")

    warnings = load_warnings + result.warnings
    if warnings:
        log("Warnings:", color="yellow", err=True)
        for warning in warnings:
            log(f"- {warning}", color="yellow", err=True)


@app.command()
def init(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to a YAML config file"),
    ] = Path("jsdoc.yml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing theme_opts section"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed progress"),
    ] = False,
) -> None:
    """Add a theme_opts section to a YAML config."""
    log, log_verbose = _make_logger(quiet, verbose)

    if not config.exists():
        log(f"Error: Config file not found: {config}", color="red", err=True)
        log(
            "Create one first or specify path with --config.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    yaml_rt = YAML()
    yaml_rt.preserve_quotes = True

    with open(config, encoding="utf-8") as f:
        data = yaml_rt.load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        log("Error: Config must be a mapping.", color="red", err=True)
        raise typer.Exit(1)

    opts = data.get("opts")
    if opts is None:
        opts = {}
        data["opts"] = opts
    if not isinstance(opts, dict):
        log("Error: 'opts' must be a mapping.", color="red", err=True)
        raise typer.Exit(1)

    if "theme_opts" in opts and not force:
        log("Error: theme_opts already configured.", color="red", err=True)
        log(
            "Use --force to overwrite existing configuration.",
            color="yellow",
            err=True,
        )
        raise typer.Exit(1)

    opts["theme_opts"] = {}

    # JSON-style configs load as flow mappings; block style is needed for
    # the commented example below
    for mapping in (data, opts):
        if isinstance(mapping, CommentedMap):
            mapping.fa.set_block_style()

    with open(config, "w", encoding="utf-8") as f:
        yaml_rt.dump(data, f)

    # ruamel's comment API is awkward for new keys, so add the example as text
    content = config.read_text(encoding="utf-8")
    ends_with_newline = content.endswith("\n")

    commented_example_lines = [
        "# title: My Project",
        "# sections: [Modules, Classes, Namespaces, Tutorials, Global]",
        "# exclude_inherited: false",
        "# search: true",
        "# extra_sidebar_items:",
        "#   - title: Guides",
        "#     path: docs/guides",
    ]

    new_lines: list[str] = []
    inserted = False
    for line in content.splitlines():
        stripped = line.strip()
        if not inserted and stripped in ("theme_opts: {}", "theme_opts:"):
            indent = " " * (len(line) - len(line.lstrip(" ")) + 2)
            new_lines.append(line.replace("theme_opts: {}", "theme_opts:"))
            new_lines.extend(indent + example for example in commented_example_lines)
            inserted = True
            continue
        new_lines.append(line)
    content = "\n".join(new_lines)
    if ends_with_newline:
        content += "\n"

    config.write_text(content, encoding="utf-8")

    log(f"Added theme_opts to {config}")
    if inserted:
        log_verbose("Configuration includes a commented example of the options")
    else:
        log_verbose(
            "Could not place the commented example; see README for the options",
            color="yellow",
        )


@app.command()
def validate(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to the JSDoc/theme config file"),
    ] = Path("jsdoc.json"),
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed config information"),
    ] = False,
) -> None:
    """Check config file validity."""
    log, log_verbose = _make_logger(quiet, verbose)

    try:
        cfg = load_config(config)
    except FileNotFoundError:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: File not found: {config}", color="red", err=True)
        raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    log(f"Config valid: {config}")
    log(f"  Title: {cfg.title}")
    log(f"  Sections: {', '.join(cfg.sections)}")
    log(f"  Search: {'on' if cfg.search else 'off'}")

    log_verbose(f"  Destination: {cfg.destination}")
    log_verbose(f"  Tutorials: {cfg.tutorials or '-'}")
    for entry in cfg.extra_md:
        log_verbose(f"  Extra page: {entry.title} ({entry.path})")
    for entry in cfg.extra_sidebar_items:
        log_verbose(f"  Sidebar item: {entry.title} ({entry.path})")


if __name__ == "__main__":
    app()
