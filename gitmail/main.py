"""CLI entry point for gitmail."""

import asyncio
import json
import sys

import click
import structlog

from gitmail import __version__
from gitmail.cli.health import health_check
from gitmail.cli.review import review_issues
from gitmail.config.settings import DEFAULT_CONFIG_PATH, GitMailSettings
from gitmail.engine.session import TriageSession
from gitmail.exceptions import ClipboardError, ConfigurationError
from gitmail.models.domain import EmailContent, ProcessingStatus
from gitmail.providers.factory import create_extractor
from gitmail.rendering.cards import render_card, render_next_steps, render_summary
from gitmail.rendering.commands import escape_for_shell, generate_command
from gitmail.utils.clipboard import copy_to_clipboard
from gitmail.utils.logging_config import LOG_LEVELS, configure_logging

log = structlog.get_logger(__name__)

OUTPUT_FORMATS = ("cards", "commands", "json")


@click.group()
@click.version_option(version=__version__, prog_name="gitmail")
@click.option(
    "--config",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (overrides the config file)",
)
@click.pass_context
def cli(ctx: click.Context, config: str, log_level: str | None) -> None:
    """gitmail: Turn feedback emails into ready-to-run GitHub issue commands."""
    # escape is standalone; health-check loads and reports on the config itself
    commands_without_config = ["escape", "health-check"]
    if ctx.invoked_subcommand in commands_without_config:
        configure_logging(log_level or "WARNING")
        ctx.obj = {"settings": None, "config_path": config}
        return

    try:
        settings = GitMailSettings.load(config)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    configure_logging(log_level or settings.log_level)
    log.debug("config_loaded", config_path=config, provider=str(settings.provider.provider_type))
    ctx.obj = {"settings": settings, "config_path": config}


@cli.command()
@click.option("--subject", "-s", default="", help="Email subject line")
@click.option("--body", "-b", default=None, help="Email body text")
@click.option(
    "--body-file",
    "-f",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True),
    default=None,
    help="Read the email body from a file ('-' for stdin)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="cards",
    show_default=True,
    help="How to print the extracted issues",
)
@click.option("--review", is_flag=True, help="Keep, edit or remove each issue before output")
@click.option("--copy", is_flag=True, help="Copy all commands to the clipboard")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write all commands to this file",
)
@click.pass_context
def parse(
    ctx: click.Context,
    subject: str,
    body: str | None,
    body_file: str | None,
    output_format: str,
    review: bool,
    copy: bool,
    output: str | None,
) -> None:
    """Extract GitHub issues from an email."""
    settings: GitMailSettings = ctx.obj["settings"]

    if body is not None and body_file is not None:
        raise click.UsageError("Use either --body or --body-file, not both")
    if review and body_file == "-":
        raise click.UsageError("--review needs an interactive terminal; pass the body with --body or a file path")

    if body_file == "-":
        body = click.get_text_stream("stdin").read()
    elif body_file is not None:
        with open(body_file) as f:
            body = f.read()

    email = EmailContent(subject=subject, body=body or "")
    if email.is_empty:
        raise click.UsageError("Provide an email subject or body")

    try:
        session = asyncio.run(_run_session(settings, email))
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)

    if session.status == ProcessingStatus.ERROR:
        click.echo(f"Error: {session.error_message}", err=True)
        sys.exit(1)

    if not session.issues:
        click.echo(session.error_message)
        return

    if review:
        review_issues(session)
        if not session.issues:
            click.echo("All issues removed; nothing to output.")
            return

    _print_issues(session, output_format)

    if output:
        with open(output, "w") as f:
            f.write(session.all_commands() + "\n")
        click.echo(f"Commands written to {output}", err=True)

    if copy:
        try:
            asyncio.run(session.copy_all(copy_to_clipboard))
        except ClipboardError as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        click.echo(click.style("All commands copied to clipboard!", fg="green"), err=True)


async def _run_session(settings: GitMailSettings, email: EmailContent) -> TriageSession:
    """Run one extraction against the configured backend."""
    async with create_extractor(settings) as extractor:
        session = TriageSession(extractor, email=email, executable=settings.commands.executable)
        await session.generate()
    return session


def _print_issues(session: TriageSession, output_format: str) -> None:
    if output_format == "commands":
        click.echo(session.all_commands())
    elif output_format == "json":
        payload = [
            {**issue.to_dict(), "command": generate_command(issue, session.executable)}
            for issue in session.issues
        ]
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(render_summary(len(session.issues)))
        for position, issue in enumerate(session.issues, start=1):
            click.echo()
            click.echo(render_card(issue, index=position, executable=session.executable))
        click.echo()
        click.echo(render_next_steps())


@cli.command()
@click.argument("text")
def escape(text: str) -> None:
    """Escape TEXT for use inside a double-quoted shell argument."""
    click.echo(escape_for_shell(text))


cli.add_command(health_check)


if __name__ == "__main__":
    cli()
