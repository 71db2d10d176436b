"""CLI entry point for opcrash."""
from __future__ import annotations

import sys
from typing import Any, Callable, Optional, Tuple

import click

from opcrash import __version__, bootstrap
from opcrash.errors import OpcrashError
from opcrash.plans import RunOptions, build_generation_plan, count_plan, execute_plan, generate_plan
from opcrash.reporting import JsonReporter, ReportManager, TerminalReporter

from .logging_setup import configure_logging

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool, debug: bool) -> None:
        self.verbose = verbose
        self.debug = debug


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"opcrash {__version__}")
    raise click.exceptions.Exit()


def _plan_options(func: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.option(
            "--plan",
            "plan_path",
            type=click.Path(exists=True, dir_okay=False),
            help="YAML generation plan.",
        ),
        click.option(
            "--catalog",
            "catalog_path",
            type=click.Path(exists=True, dir_okay=False),
            help="YAML operation catalogue (overrides the plan's 'catalog').",
        ),
        click.option("--type", "type_names", multiple=True, help="Type to test; repeatable. Defaults to all declared."),
        click.option("--depth", type=click.IntRange(min=1), help="Maximum nesting of calls per plan.  [default: 3]"),
        click.option(
            "--visibility",
            type=click.Choice(["public", "package", "private"]),
            help="Lowest visibility of operations under test.",
        ),
        click.option("--max-plans", type=click.IntRange(min=1), help="Sample at most this many plans per type."),
        click.option("--seed", type=int, help="Seed for plan sampling."),
        click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option("--debug", is_flag=True, help="Enable debug logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the opcrash version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Generate and execute crash tests from an operation catalogue."""

    configure_logging(verbose=verbose, debug=debug)
    bootstrap()
    ctx.obj = CliState(verbose=verbose, debug=debug)


@cli.command()
@_plan_options
@click.option("--out", "out_dir", type=click.Path(file_okay=False), help="Directory for generated test classes.")
@click.option("--methods-per-file", type=click.IntRange(min=1), help="Test methods per generated class.")
@click.option(
    "--classify/--no-classify",
    default=None,
    help="Wrap blocks in failure classification (FilteringTestCase).",
)
@click.pass_obj
def generate(
    state: CliState,
    plan_path: Optional[str],
    catalog_path: Optional[str],
    type_names: Tuple[str, ...],
    depth: Optional[int],
    visibility: Optional[str],
    max_plans: Optional[int],
    seed: Optional[int],
    no_color: bool,
    out_dir: Optional[str],
    methods_per_file: Optional[int],
    classify: Optional[bool],
) -> None:
    """Write JUnit test classes for the selected plans."""

    options = RunOptions(
        plan_path=plan_path,
        catalog_path=catalog_path,
        types=type_names,
        depth=depth,
        visibility=visibility,
        max_plans=max_plans,
        seed=seed,
        classify=classify,
        methods_per_file=methods_per_file,
        out_dir=out_dir,
        color=False if no_color else None,
    )
    try:
        plan = build_generation_plan(options)
        exit_code = generate_plan(plan, use_color=plan.settings.color)
    except OpcrashError as exc:
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(exit_code)


@cli.command()
@_plan_options
@click.pass_obj
def count(
    state: CliState,
    plan_path: Optional[str],
    catalog_path: Optional[str],
    type_names: Tuple[str, ...],
    depth: Optional[int],
    visibility: Optional[str],
    max_plans: Optional[int],
    seed: Optional[int],
    no_color: bool,
) -> None:
    """Print the plan space size of each type and operation."""

    options = RunOptions(
        plan_path=plan_path,
        catalog_path=catalog_path,
        types=type_names,
        depth=depth,
        visibility=visibility,
        max_plans=max_plans,
        seed=seed,
        color=False if no_color else None,
    )
    try:
        plan = build_generation_plan(options)
        exit_code = count_plan(plan, use_color=plan.settings.color)
    except OpcrashError as exc:
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(exit_code)


@cli.command()
@_plan_options
@click.option("--fail-fast", is_flag=True, help="Stop at the first crash.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(["terminal", "json"]),
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report json, write to this path.")
@click.pass_obj
def run(
    state: CliState,
    plan_path: Optional[str],
    catalog_path: Optional[str],
    type_names: Tuple[str, ...],
    depth: Optional[int],
    visibility: Optional[str],
    max_plans: Optional[int],
    seed: Optional[int],
    no_color: bool,
    fail_fast: bool,
    report_format: Optional[str],
    report_path: Optional[str],
) -> None:
    """Execute the selected plans in process and classify their failures."""

    options = RunOptions(
        plan_path=plan_path,
        catalog_path=catalog_path,
        types=type_names,
        depth=depth,
        visibility=visibility,
        max_plans=max_plans,
        seed=seed,
        fail_fast=fail_fast,
        report_format=report_format,
        report_path=report_path,
        color=False if no_color else None,
    )
    try:
        plan = build_generation_plan(options)
        settings = plan.settings
        reporters = [TerminalReporter(use_color=settings.color)]
        if settings.report_format == "json":
            assert settings.report_path  # checked by the loader
            reporters.append(JsonReporter(settings.report_path))
        exit_code, _ = execute_plan(plan, ReportManager(reporters))
    except OpcrashError as exc:
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(exit_code)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="opcrash", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
