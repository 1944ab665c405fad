from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="scopecheck", help="Run test scripts and report their sections")


@app.command()
def run(
    script: str = typer.Argument(help="Path to a Python test script"),
    config: str | None = typer.Option(
        None, "--config", "-c", help="YAML file with report options"
    ),
    detail_depth: int | None = typer.Option(
        None,
        "--detail-depth",
        "-d",
        min=-1,
        help="Nested levels to expand in the report (-1 expands everything)",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Render the report without ANSI colors"
    ),
    junit: str | None = typer.Option(None, help="Also write JUnit XML to this path"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(
        None, help="Write debug output to this file (defaults to .scopecheck/debug.log)"
    ),
):
    """Run a test script and print its report."""
    import runpy

    import yaml

    from scopecheck.config import ReportOptions, load_options
    from scopecheck.context import TestTree, set_tree
    from scopecheck.outcome import Outcome
    from scopecheck.tree import summarize

    script_path = Path(script)
    if not script_path.is_file():
        typer.echo(f"Error: test script not found: {script}", err=True)
        raise typer.Exit(1)

    options = ReportOptions()
    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        try:
            options = load_options(config_path)
        except (ValueError, yaml.YAMLError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

    overrides: dict = {}
    if detail_depth is not None:
        overrides["detail_depth"] = detail_depth
    if no_color:
        overrides["color"] = False
    if overrides:
        options = options.model_copy(update=overrides)

    logger = None
    if verbose or debug_log is not None:
        from scopecheck.verbose import setup_logger

        debug_file = (
            Path(debug_log) if debug_log is not None else Path(".scopecheck/debug.log")
        )
        logger = setup_logger(debug_file, verbose=verbose, logger_name="scopecheck_cli")

    tree = TestTree(options=options, logger=logger)
    previous = set_tree(tree)
    error: BaseException | None = None
    try:
        runpy.run_path(str(script_path), run_name="__main__")
    except SystemExit as e:
        if e.code not in (None, 0):
            error = e
    except Exception as e:
        error = e
    finally:
        set_tree(previous)
        if logger is not None:
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)

    typer.echo(tree.generate_report())
    counts = summarize(tree.root)
    typer.echo(
        f"\n{counts.passed} passed, {counts.failed} failed, {counts.not_run} not run"
    )

    if junit is not None:
        from scopecheck.reporting.junit import write_junit

        junit_path = write_junit(tree.root, Path(junit))
        typer.echo(f"JUnit report: {junit_path}")

    if error is not None:
        typer.echo(
            f"Error: {script} raised {type(error).__name__}: {error}", err=True
        )
        raise typer.Exit(1)

    if tree.outcome() is Outcome.FAILED:
        raise typer.Exit(1)


EXAMPLE_SUITE = '''\
from scopecheck import check, require, section

with section("Math"):
    require(2 + 2 == 4)
    require(10 // 3 == 3, "floor division")
    check(round(0.1 + 0.2, 9) == 0.3, "float rounding")

    with section("Strings"):
        require("abc".upper() == "ABC")
        require(lambda: "a,b".split(",") == ["a", "b"], "lazy condition")
'''

EXAMPLE_OPTIONS = """\
report:
  detail_depth: 1
  color: true
"""


@app.command()
def init(
    dir: str = typer.Option(
        "scopecheck", "--dir", help="Directory to write the example suite in"
    ),
):
    """Write an example test script and options file."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    suite = project_dir / "suite.py"
    if suite.exists():
        typer.echo(f"suite.py already exists in {dir}, skipping.")
        return

    suite.write_text(EXAMPLE_SUITE)
    (project_dir / "scopecheck.yaml").write_text(EXAMPLE_OPTIONS)

    typer.echo(f"Initialized example suite in {dir}:")
    typer.echo("  suite.py          - example test script")
    typer.echo("  scopecheck.yaml   - report options")
    typer.echo(
        f"Run it with: scopecheck run {suite} --config {project_dir / 'scopecheck.yaml'}"
    )