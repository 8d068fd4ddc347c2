"""Rich console output for oracle-skills."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

if TYPE_CHECKING:
    from oracle_skills.agents import AgentConfig
    from oracle_skills.config import Settings
    from oracle_skills.discovery import Skill
    from oracle_skills.types import InstallResult


class TUI:
    """Text output and prompts for the CLI."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize TUI.

        Args:
            console: Console to write to. Defaults to a new stdout console.
        """
        self.console = console or Console()

    def confirm(self, message: str, default: bool = True) -> bool:
        """Show confirmation prompt.

        Args:
            message: Confirmation message.
            default: Default response.

        Returns:
            User's response.
        """
        return Confirm.ask(message, default=default, console=self.console)

    def show_agents(self, agents: list[AgentConfig], detected: set[str]) -> None:
        """Display the supported agents table.

        Args:
            agents: Agents to list.
            detected: Identifiers of agents detected on this system.
        """
        table = Table(title="Supported agents")
        table.add_column("Agent", style="cyan", no_wrap=True)
        table.add_column("Name", no_wrap=True)
        table.add_column("Local")
        table.add_column("Global")
        table.add_column("Detected")

        for agent in agents:
            status = "[green]✓[/green]" if agent.id.value in detected else "[dim]-[/dim]"
            table.add_row(
                agent.id.value,
                agent.display_name,
                agent.skills_dir,
                str(agent.global_skills_dir),
                status,
            )

        self.console.print(table)
        self.console.print(f"{len(detected)} of {len(agents)} agents detected")

    def show_skills(self, skills: list[Skill]) -> None:
        """Display available skills.

        Args:
            skills: Skills to list.
        """
        if not skills:
            self.console.print("[yellow]No skills found[/yellow]")
            return

        self.console.print(f"Found {len(skills)} skills:\n")
        for skill in skills:
            self.console.print(f"  [bold]{skill.name}[/bold]")
            if skill.description:
                self.console.print(f"    [dim]{escape(skill.description)}[/dim]")

    def show_install_results(self, results: list[InstallResult], verb: str = "Installed") -> None:
        """Display per-agent outcomes.

        Args:
            results: One result per agent.
            verb: Past-tense verb for the summary line.
        """
        for result in results:
            if result.success:
                self.show_success(f"{result.agent}: {result.target_dir}")
            else:
                for name, error in result.failed.items():
                    self.show_error(f"{result.agent}: {name} failed: {error}")

        skill_count = max((len(r.installed) for r in results), default=0)
        self.show_info(f"{verb} {skill_count} skills for {len(results)} agent(s)")

    def show_settings(self, settings: Settings, config_file: str) -> None:
        """Display effective configuration.

        Args:
            settings: Effective settings.
            config_file: Path of the settings file.
        """
        self.console.print("\n[bold]Configuration[/bold]")
        self.console.print(f"  Config file: {config_file}")
        self.console.print(f"  Repository: {settings.repository}")
        self.console.print(f"  Skills path: {settings.skills_path}")
        self.console.print(f"  Temp root: {settings.temp_root}")
        default_agents = ", ".join(settings.default_agents) or "(detected)"
        self.console.print(f"  Default agents: {default_agents}")

    def show_success(self, message: str) -> None:
        """Show success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message."""
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message."""
        self.console.print(f"[blue]i[/blue] {message}")
