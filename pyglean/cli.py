"""Defines the command-line interface for the pyglean application.

This module uses the `click` library to create the `pyglean` command. It lets
users check an SDK configuration file before shipping it, and try out the
individual sanitizers and validators on single values.
"""
import json
import sys
import io
import click
import logging
from typing import Any, Dict, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core.config import Config
from .core.validator import validate_configuration
from .utils.sanitize import HEADER_MAX_LENGTH, sanitize_application_id, validate_header, validate_url

# Configure rich console for output.
console = Console()

# Set up basic logging.
logger = logging.getLogger(__name__)


class AliasedGroup(click.Group):
    """A click Group that also accepts the short command names in `ALIASES`."""

    ALIASES: Dict[str, str] = {"c": "check", "s": "sanitize"}

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.ALIASES.get(cmd_name, cmd_name))


@click.group(cls=AliasedGroup, invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="pyglean")
@click.option("--verbose", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Check telemetry SDK settings before they reach the SDK.

    pyglean runs the same checks a Glean-style SDK applies to its
    configuration: the application id, the server endpoint, the debug view
    tag and source tags, and the types of the remaining settings.
    """
    if sys.platform == "win32" and isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(encoding='utf-8')
    log_level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=log_level, format='%(asctime)s - %(levelname)s - %(message)s')
    logger.debug("Debug mode enabled.")

    if ctx.invoked_subcommand is None:
        console.print("Use 'pyglean check' to check your configuration, or 'pyglean --help' for more commands.")


@main.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a config file.")
@click.option("--json", "json_output", is_flag=True, help="Output results in JSON format.")
@click.option("--md", "md_output", is_flag=True, help="Output results in Markdown format.")
def check(config_path: Optional[str], json_output: bool, md_output: bool) -> None:
    """Check a configuration with every enabled validator.

    Without --config, the configuration is assembled from `pyglean.toml` in
    the current directory, the user config file and PYGLEAN_* environment
    variables. The command exits with status 1 if any error is found.
    """
    config_obj = Config(config_path=config_path)
    results = validate_configuration(config_obj)

    if json_output:
        click.echo(json.dumps(results, indent=2))
    elif md_output:
        click.echo(_format_results_as_markdown(results))
    else:
        _display_results(results)

    if results["errors"]:
        sys.exit(1)


def _format_results_as_markdown(results: Dict[str, Any]) -> str:
    """Formats validation results into a Markdown string.

    Args:
        results: The result dictionary from `validate_configuration`.

    Returns:
        A Markdown-formatted string representing the results.
    """
    app_id = results.get("application_id") or "unknown application"
    markdown = f"# Configuration check for `{app_id}`\n\n"
    errors = results.get("errors", [])
    warnings = results.get("warnings", [])
    if errors:
        markdown += "## Errors\n"
        for error in errors:
            markdown += f"- {error}\n"
    if warnings:
        markdown += "\n## Warnings\n"
        for warning in warnings:
            markdown += f"- {warning}\n"
    if not errors and not warnings:
        markdown += "No issues found.\n"
    return markdown


def _status_for(result: Dict[str, Any]) -> str:
    if result.get("errors"):
        return "[red]Failed[/red]"
    if result.get("warnings"):
        return "[yellow]Warning[/yellow]"
    return "[green]Passed[/green]"


def _display_results(results: Dict[str, Any]) -> None:
    """Displays validation results as rich tables.

    Args:
        results: The result dictionary from `validate_configuration`.
    """
    validator_results = results.get("validator_results", [])
    if not validator_results:
        console.print("[yellow]No validators were run.[/yellow]")
        return

    sources = results.get("sources") or ["defaults and environment"]
    console.print(f"\n[bold blue]Configuration from: {escape(', '.join(sources))}[/bold blue]")

    summary_table = Table(title="Validator Summary")
    summary_table.add_column("Validator", style="cyan")
    summary_table.add_column("Category")
    summary_table.add_column("Status")
    for res in validator_results:
        summary_table.add_row(res["name"], res["category"], _status_for(res))
    console.print(summary_table)

    errors = results.get("errors", [])
    warnings = results.get("warnings", [])
    if errors or warnings:
        issues_table = Table(title="Issues")
        issues_table.add_column("Level", style="bold")
        issues_table.add_column("Message")
        for error in errors:
            issues_table.add_row("[red]ERROR[/red]", escape(error))
        for warning in warnings:
            issues_table.add_row("[yellow]WARNING[/yellow]", escape(warning))
        console.print(issues_table)

    sanitized = results.get("sanitized_application_id")
    if sanitized:
        console.print(f"Pings will be submitted for application [bold]{escape(sanitized)}[/bold].")

    if errors:
        console.print(Panel(f"Found {len(errors)} error(s) and {len(warnings)} warning(s).", style="red", title="Check Complete"))
    elif warnings:
        console.print(Panel(f"Found {len(warnings)} warning(s).", style="yellow", title="Check Complete"))
    else:
        console.print(Panel("No issues found.", style="green", title="Check Complete"))


@main.command()
@click.argument("application_ids", nargs=-1, required=True)
def sanitize(application_ids: Tuple[str, ...]) -> None:
    """Print the sanitized form of one or more application ids."""
    for application_id in application_ids:
        click.echo(sanitize_application_id(application_id))


def _report_validity(kind: str, value: str, valid: bool) -> None:
    if valid:
        console.print(f"[green]'{escape(value)}' is a valid {kind}.[/green]")
    else:
        console.print(f"[red]'{escape(value)}' is not a valid {kind}.[/red]")
        sys.exit(1)


@main.command()
@click.argument("value", type=str)
def url(value: str) -> None:
    """Check whether VALUE can be used as a server endpoint."""
    _report_validity("server endpoint", value, validate_url(value))


@main.command()
@click.argument("value", type=str)
@click.option("--max-length", type=int, default=HEADER_MAX_LENGTH, show_default=True, help="Longest accepted value.")
def header(value: str, max_length: int) -> None:
    """Check whether VALUE can be sent as an HTTP header value."""
    _report_validity("header value", value, validate_header(value, max_length=max_length))


def _parse_cli_value(value: str) -> Any:
    """Casts a value typed on the command line to a TOML-friendly type."""
    if value.lower() in ('true', 'false'):
        return value.lower() == 'true'
    if value.isdigit():
        return int(value)
    if "," in value:
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


@main.command()
@click.argument("action", type=click.Choice(['get', 'set', 'list']), required=True)
@click.argument("key", type=str, required=False)
@click.argument("value", type=str, required=False)
def config(action: str, key: Optional[str], value: Optional[str]) -> None:
    """Manage the pyglean configuration.

    This command allows you to view and set configuration values that are
    stored in the user-level configuration file.

    \b
    ACTION:
        get <key>         Get a configuration value.
        set <key> <value> Set a configuration value.
        list              List all current configuration values.
    """
    config_obj = Config()
    if action == "list":
        console.print(Panel(escape(json.dumps(config_obj.config, indent=2, default=str)), title="Current Configuration"))
    elif action == "get":
        if not key:
            console.print("[red]Error: 'get' action requires a key.[/red]")
            sys.exit(1)
        click.echo(json.dumps(config_obj.get(key), default=str))
    elif action == "set":
        if not key or value is None:
            console.print("[red]Error: 'set' action requires a key and a value.[/red]")
            sys.exit(1)
        processed_value = _parse_cli_value(value)
        config_obj.set(key, processed_value)
        try:
            config_obj.save_user_config()
            console.print(f"[green]'{escape(key)}' set to '{escape(str(processed_value))}' and saved to user config.[/green]")
        except IOError as e:
            console.print(f"[red]Error saving configuration: {escape(str(e))}[/red]")
            sys.exit(1)


if __name__ == "__main__":
    main()
