"""Health check command for gitmail."""

import asyncio
import shutil
import sys
from pathlib import Path

import click
import structlog

from gitmail.config.settings import GitMailSettings
from gitmail.exceptions import ConfigurationError, GitMailError
from gitmail.providers.factory import create_extractor
from gitmail.utils.clipboard import detect_clipboard_command

log = structlog.get_logger(__name__)


# Exit codes for semantic error reporting
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_CREDENTIAL_ERROR = 2
EXIT_PROVIDER_ERROR = 3


def _print_check(name: str, status: bool, detail: str | None = None) -> None:
    """Print a check result with consistent formatting."""
    if status:
        click.echo(f"  {click.style('[OK]', fg='green')} {name}")
    else:
        click.echo(f"  {click.style('[FAIL]', fg='red')} {name}")

    if detail:
        click.echo(f"       {detail}")


def _print_warning(name: str, detail: str) -> None:
    click.echo(f"  {click.style('[WARN]', fg='yellow')} {name}")
    click.echo(f"       {detail}")


def _mask(secret: str) -> str:
    if len(secret) > 8:
        return secret[:4] + "*" * (len(secret) - 8) + secret[-4:]
    return "*" * len(secret)


async def _check_provider(settings: GitMailSettings) -> tuple[bool, str | None]:
    try:
        async with create_extractor(settings) as extractor:
            await extractor.connect()
    except GitMailError as e:
        log.debug("health_check_provider_failed", error=e.message, error_type=type(e).__name__)
        return False, e.message
    return True, None


@click.command("health-check")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show detailed information for each check",
)
@click.option(
    "--skip-connectivity",
    is_flag=True,
    help="Skip network connectivity checks (config validation only)",
)
@click.pass_context
def health_check(ctx: click.Context, verbose: bool, skip_connectivity: bool) -> None:
    """Validate configuration and test connectivity.

    \b
    Checks performed:
      1. Configuration file loads and validates (defaults when absent)
      2. API key resolves for cloud providers
      3. Model provider is reachable (unless --skip-connectivity)
      4. gh CLI and a clipboard utility are installed (warnings only)

    \b
    Exit codes:
      0 - All checks passed
      1 - Configuration file error
      2 - Credential resolution error
      3 - Model provider connectivity error
    """
    config_path = ctx.obj["config_path"]

    click.echo(click.style("gitmail Health Check", bold=True))
    click.echo()

    # -------------------------------------------------------------------------
    # Check 1: Configuration
    # -------------------------------------------------------------------------
    click.echo(click.style("Configuration:", bold=True))

    config_file = Path(config_path)
    if config_file.exists():
        _print_check("Config file found", True, str(config_file.resolve()) if verbose else None)
    else:
        _print_check("Config file found", True, "Not present, using defaults and environment")

    try:
        settings = GitMailSettings.load(config_path)
    except ConfigurationError as e:
        _print_check("Config validates", False, e.message)
        sys.exit(EXIT_CONFIG_ERROR)

    provider = settings.provider
    _print_check(
        "Config validates",
        True,
        f"Provider: {provider.provider_type}, Model: {provider.model or 'default'}" if verbose else None,
    )

    # -------------------------------------------------------------------------
    # Check 2: Credentials
    # -------------------------------------------------------------------------
    click.echo()
    click.echo(click.style("Credentials:", bold=True))

    if provider.provider_type.requires_api_key:
        api_key = provider.resolve_api_key()
        if not api_key:
            _print_check("API key", False, "Set GEMINI_API_KEY or provider.api_key in the config file")
            sys.exit(EXIT_CREDENTIAL_ERROR)
        _print_check("API key", True, f"Resolved: {_mask(api_key)}" if verbose else None)
    else:
        _print_check("API key", True, "Not required (local provider)" if verbose else None)

    # -------------------------------------------------------------------------
    # Check 3: Provider connectivity (optional)
    # -------------------------------------------------------------------------
    all_passed = True
    if not skip_connectivity:
        click.echo()
        click.echo(click.style("Connectivity:", bold=True))

        success, error = asyncio.run(_check_provider(settings))
        name = f"{str(provider.provider_type).capitalize()} provider"
        if success:
            _print_check(name, True, f"Model ready: {provider.model or 'default'}" if verbose else None)
        else:
            _print_check(name, False, error)
            all_passed = False

    # -------------------------------------------------------------------------
    # Check 4: Local tools
    # -------------------------------------------------------------------------
    click.echo()
    click.echo(click.style("Tools:", bold=True))

    executable = settings.commands.executable
    executable_path = shutil.which(executable)
    if executable_path:
        _print_check(f"{executable} CLI", True, f"Found at {executable_path}" if verbose else None)
    else:
        _print_warning(f"{executable} CLI", "Not found in PATH. Install from: https://cli.github.com/")

    clipboard = detect_clipboard_command()
    if clipboard:
        _print_check("Clipboard utility", True, clipboard[0] if verbose else None)
    else:
        _print_warning("Clipboard utility", "None found; use --output instead of --copy")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------
    click.echo()
    if all_passed:
        click.echo(click.style("All checks passed!", fg="green", bold=True))
        sys.exit(EXIT_SUCCESS)
    else:
        click.echo(click.style("Some checks failed.", fg="red", bold=True))
        click.echo("Review the errors above and fix the configuration.")
        sys.exit(EXIT_PROVIDER_ERROR)
