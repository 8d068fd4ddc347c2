"""CLI commands using Typer."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from oracle_skills import __version__
from oracle_skills.agents import detect_installed_agents, list_agents
from oracle_skills.console import TUI
from oracle_skills.context import create_context
from oracle_skills.resolve import (
    InstallOptions,
    InstallResolver,
    NoAgentsError,
    split_agents,
)
from oracle_skills.table import render_table
from oracle_skills.types import OracleSkillsError

if TYPE_CHECKING:
    from oracle_skills.agents import AgentConfig
    from oracle_skills.context import AppContext, RunContext
    from oracle_skills.types import InstallResult

app = typer.Typer(
    name="oracle-skills",
    help="Install Oracle skills into your AI coding agents",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")

tui = TUI()
console = tui.console

AgentOption = Annotated[
    list[str] | None,
    typer.Option("--agent", "-a", help="Target agent (repeatable, default: detected agents)"),
]
SkillOption = Annotated[
    list[str] | None,
    typer.Option("--skill", "-s", help="Skill name (repeatable, default: all skills)"),
]
GlobalOption = Annotated[
    bool, typer.Option("--global", "-g", help="Use user-wide skill directories")
]
YesOption = Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Enable debug logging")
    ] = False,
) -> None:
    """Install Oracle skills into your AI coding agents."""
    _configure_logging(verbose)


# ============================================================================
# Helpers
# ============================================================================


@contextmanager
def _spinner(description: str) -> Iterator[None]:
    """Show a spinner while a blocking step runs."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(description, total=None)
        yield


def _load_context(context: AppContext | None) -> AppContext:
    """Return the injected context, or build one from the user configuration."""
    if context is not None:
        return context
    try:
        return create_context()
    except OracleSkillsError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e


def _target_agent_ids(ctx: AppContext, agents: list[str] | None) -> list[str]:
    """Pick the agents a command should act on.

    Explicit --agent values win, then configured default agents, then
    whatever is detected on this system.

    Raises:
        NoAgentsError: If nothing was requested, configured or detected.
    """
    if agents:
        return agents
    if ctx.settings.default_agents:
        return list(ctx.settings.default_agents)
    detected = [agent.id.value for agent in detect_installed_agents()]
    if not detected:
        raise NoAgentsError("No agents detected. Use --agent to pick one (see: oracle-skills agents)")
    return detected


def _known_agents(agent_ids: list[str]) -> list[AgentConfig]:
    """Resolve identifiers to agents, warning about unknown ones."""
    agents, unknown = split_agents(agent_ids)
    for agent_id in unknown:
        tui.show_warning(f"Unknown agent: {agent_id}")
    if not agents:
        raise NoAgentsError(f"No known agents selected: {', '.join(agent_ids)}")
    return agents


def _exit_on_failures(results: list[InstallResult]) -> None:
    if any(not result.success for result in results):
        raise typer.Exit(1)


# ============================================================================
# Install Commands
# ============================================================================


@app.command()
def install(
    agent: AgentOption = None,
    skill: SkillOption = None,
    global_: GlobalOption = False,
    yes: YesOption = False,
    _context=None,
) -> None:
    """Install skills to one or more agents."""
    ctx = _load_context(_context)
    options = InstallOptions(skills=skill or None, global_=global_, yes=yes)
    run = ctx.new_run(global_=global_)
    resolver = InstallResolver(confirm=tui.confirm)

    try:
        agent_ids = _target_agent_ids(ctx, agent)
        with ExitStack() as stack:
            with _spinner("Cloning Oracle skills repository..."):
                repo_path = stack.enter_context(ctx.gitops.checkout(run))

            skills = ctx.discovery.discover(repo_path)
            if not skills:
                tui.show_error("No skills found to install")
                raise typer.Exit(1)

            plan = resolver.resolve(skills, agent_ids, options)
            if plan is None:
                tui.show_info("Installation cancelled")
                return

            for agent_id in plan.unknown_agents:
                tui.show_warning(f"Unknown agent: {agent_id}")

            with _spinner("Installing skills..."):
                results = ctx.installer.install(plan, run)
    except OracleSkillsError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e

    tui.show_install_results(results)
    _exit_on_failures(results)


@app.command()
def uninstall(
    agent: AgentOption = None,
    skill: SkillOption = None,
    global_: GlobalOption = False,
    yes: YesOption = False,
    _context=None,
) -> None:
    """Remove skills from one or more agents."""
    ctx = _load_context(_context)
    run = ctx.new_run(global_=global_)

    try:
        agents = _known_agents(_target_agent_ids(ctx, agent))
        names = list(skill) if skill else _catalog_skill_names(ctx, run)
    except OracleSkillsError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e

    if not names:
        tui.show_warning("No skills to remove")
        return

    agent_list = ", ".join(a.display_name for a in agents)
    if not yes and not tui.confirm(f"Remove {len(names)} skills from {agent_list}?"):
        tui.show_info("Uninstall cancelled")
        return

    results = ctx.installer.uninstall(names, agents, run)
    tui.show_install_results(results, verb="Removed")
    _exit_on_failures(results)


def _catalog_skill_names(ctx: AppContext, run: RunContext) -> list[str]:
    """Fetch the repository and return every skill name it offers."""
    with ExitStack() as stack:
        with _spinner("Cloning Oracle skills repository..."):
            repo_path = stack.enter_context(ctx.gitops.checkout(run))
        return [s.name for s in ctx.discovery.discover_sorted(repo_path)]


# ============================================================================
# Catalog Commands
# ============================================================================


@app.command("list")
def list_skills(
    _context=None,
) -> None:
    """List skills available in the repository."""
    ctx = _load_context(_context)
    run = ctx.new_run()

    try:
        with ExitStack() as stack:
            with _spinner("Cloning Oracle skills repository..."):
                repo_path = stack.enter_context(ctx.gitops.checkout(run))
            skills = ctx.discovery.discover_sorted(repo_path)
    except OracleSkillsError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e

    tui.show_skills(skills)


@app.command()
def agents() -> None:
    """List supported agents and which ones are installed."""
    detected = {agent.id.value for agent in detect_installed_agents()}
    tui.show_agents(list_agents(), detected)


@app.command()
def table(
    path: Annotated[
        Path | None,
        typer.Option("--path", "-p", help="Local skills directory (default: fetch repository)"),
    ] = None,
    _context=None,
) -> None:
    """Print the markdown skills table."""
    ctx = _load_context(_context)

    if path is not None:
        if not path.is_dir():
            tui.show_error(f"Not a directory: {path}")
            raise typer.Exit(1)
        typer.echo(render_table(ctx.discovery.discover_dir(path)))
        return

    run = ctx.new_run()
    try:
        with ExitStack() as stack:
            with _spinner("Cloning Oracle skills repository..."):
                repo_path = stack.enter_context(ctx.gitops.checkout(run))
            typer.echo(render_table(ctx.discovery.discover(repo_path)))
    except OracleSkillsError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    _context=None,
) -> None:
    """Show current configuration."""
    ctx = _load_context(_context)
    tui.show_settings(ctx.settings, str(ctx.config.config_file))


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Configuration key")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
    _context=None,
) -> None:
    """Set a configuration value."""
    ctx = _load_context(_context)

    try:
        ctx.config.set_value(key, value)
    except (ValueError, OracleSkillsError) as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e
    tui.show_success(f"Set {key} to {value}")


if __name__ == "__main__":
    app()
