"""Command line interface for basic-code-intel.

Runs a single definition, references or hover lookup against a Sourcegraph
instance and prints the result.

Example:
    basic-code-intel definition 'git://github.com/foo/bar?main#cmd/main.go' 12 8

"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import typer
from rich.markdown import Markdown
from rich.table import Table

from basic_code_intel import __version__
from basic_code_intel.api import GraphQLClient, SourcegraphAPI
from basic_code_intel.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SIGINT,
    EXIT_SUCCESS,
    _error,
    _info,
    _setup_logging,
    console,
)
from basic_code_intel.config import BasicCodeIntelSettings, load_settings
from basic_code_intel.core.exceptions import BasicCodeIntelError, ConfigError, LanguageNotFoundError
from basic_code_intel.languages import LanguageProfile, LanguageRegistry
from basic_code_intel.providers.base import Hover, TextDocument
from basic_code_intel.search.providers import SearchProviders
from basic_code_intel.search.types import Location, Position
from basic_code_intel.search.uri import parse_git_uri

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="basic-code-intel",
    help="Search-based code navigation against a Sourcegraph instance",
    no_args_is_help=True,
)

_URI_HELP = "Document URI: git://{repo}?{revision}#{path}"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"basic-code-intel {__version__}")
        raise typer.Exit(code=EXIT_SUCCESS)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Search-based code intelligence."""


def _load_settings(
    config: Path | None,
    url: str | None,
    token: str | None,
) -> BasicCodeIntelSettings:
    """Build settings from an optional file plus command line overrides.

    Raises:
        typer.Exit: On configuration errors.

    """
    try:
        settings = load_settings(config) if config is not None else BasicCodeIntelSettings()
        overrides: dict[str, Any] = {}
        if url:
            overrides["sourcegraph_url"] = url
        if token:
            overrides["access_token"] = token
        if overrides:
            settings = BasicCodeIntelSettings.model_validate(
                {**settings.model_dump(), **overrides}
            )
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    except ValueError as e:
        _error(f"Invalid setting: {e}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    return settings


def _resolve_profile(uri: str, language: str | None) -> LanguageProfile:
    """Pick the language profile by id, or by the document's extension.

    Raises:
        typer.Exit: If the URI is malformed or no profile matches.

    """
    registry = LanguageRegistry.default()
    try:
        if language:
            return registry.get(language)
        path = parse_git_uri(uri).path
    except LanguageNotFoundError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    except ValueError as e:
        _error(f"Invalid document URI: {e}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    profile = registry.for_path(path)
    if profile is None:
        _error(f"No language claims {path}; pass --language")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    return profile


async def _lookup(
    operation: str,
    settings: BasicCodeIntelSettings,
    profile: LanguageProfile,
    document: TextDocument,
    position: Position,
) -> list[Location] | Hover | None:
    async with GraphQLClient(settings) as client:
        api = SourcegraphAPI(client, settings)
        providers = SearchProviders(profile, api, api, api, settings)
        if operation == "definition":
            return await providers.find_definition(document, position)
        if operation == "references":
            return await providers.find_references(document, position)
        return await providers.find_hover(document, position)


def _run(
    operation: str,
    uri: str,
    line: int,
    character: int,
    language: str | None,
    config: Path | None,
    url: str | None,
    token: str | None,
    verbose: bool,
    quiet: bool,
) -> list[Location] | Hover | None:
    _setup_logging(verbose, quiet)
    settings = _load_settings(config, url, token)
    profile = _resolve_profile(uri, language)
    logger.debug("Using %s profile for %s", profile.language_id, uri)

    document = TextDocument(uri=uri, language_id=profile.language_id)
    try:
        return asyncio.run(_lookup(operation, settings, profile, document, Position(line, character)))
    except BasicCodeIntelError as e:
        _error(f"Lookup failed: {e}")
        raise typer.Exit(code=EXIT_ERROR) from None
    except KeyboardInterrupt:
        raise typer.Exit(code=EXIT_SIGINT) from None


def _print_locations(locations: list[Location] | None, title: str) -> None:
    if not locations:
        _info(f"No {title.lower()} found")
        raise typer.Exit(code=EXIT_ERROR)

    table = Table(title=title)
    table.add_column("Repository")
    table.add_column("Revision")
    table.add_column("Path")
    table.add_column("Line", justify="right")
    table.add_column("Character", justify="right")
    for location in locations:
        target = parse_git_uri(location.uri)
        start = location.range.start if location.range else None
        table.add_row(
            target.repo,
            target.commit,
            target.path,
            str(start.line + 1) if start else "",
            str(start.character) if start else "",
        )
    console.print(table)


_uri_argument = typer.Argument(..., help=_URI_HELP)
_line_argument = typer.Argument(..., min=0, help="Zero-based line")
_character_argument = typer.Argument(..., min=0, help="Zero-based character")
_language_option = typer.Option(
    None, "--language", "-l", help="Language id (default: from file extension)"
)
_config_option = typer.Option(
    None, "--config", "-c", exists=True, dir_okay=False, help="YAML settings file"
)
_url_option = typer.Option(None, "--url", "-u", help="Sourcegraph instance URL")
_token_option = typer.Option(
    None, "--token", envvar="BASIC_CODE_INTEL_TOKEN", help="Sourcegraph access token"
)
_verbose_option = typer.Option(False, "--verbose", "-v", help="Enable debug output")
_quiet_option = typer.Option(False, "--quiet", "-q", help="Only show errors")


@app.command()
def definition(
    uri: str = _uri_argument,
    line: int = _line_argument,
    character: int = _character_argument,
    language: str | None = _language_option,
    config: Path | None = _config_option,
    url: str | None = _url_option,
    token: str | None = _token_option,
    verbose: bool = _verbose_option,
    quiet: bool = _quiet_option,
) -> None:
    """Find the definition of the identifier at a position."""
    result = _run("definition", uri, line, character, language, config, url, token, verbose, quiet)
    _print_locations(result if isinstance(result, list) else None, "Definitions")


@app.command()
def references(
    uri: str = _uri_argument,
    line: int = _line_argument,
    character: int = _character_argument,
    language: str | None = _language_option,
    config: Path | None = _config_option,
    url: str | None = _url_option,
    token: str | None = _token_option,
    verbose: bool = _verbose_option,
    quiet: bool = _quiet_option,
) -> None:
    """Find references to the identifier at a position."""
    result = _run("references", uri, line, character, language, config, url, token, verbose, quiet)
    _print_locations(result if isinstance(result, list) else None, "References")


@app.command()
def hover(
    uri: str = _uri_argument,
    line: int = _line_argument,
    character: int = _character_argument,
    language: str | None = _language_option,
    config: Path | None = _config_option,
    url: str | None = _url_option,
    token: str | None = _token_option,
    verbose: bool = _verbose_option,
    quiet: bool = _quiet_option,
) -> None:
    """Show hover documentation for the identifier at a position."""
    result = _run("hover", uri, line, character, language, config, url, token, verbose, quiet)
    if not isinstance(result, Hover):
        _info("No hover found")
        raise typer.Exit(code=EXIT_ERROR)
    console.print(Markdown(result.contents))


@app.command("languages")
def list_languages() -> None:
    """List supported languages."""
    table = Table(title="Languages")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Extensions")
    table.add_column("Import filter")
    for profile in sorted(LanguageRegistry.default(), key=lambda p: p.language_id):
        table.add_row(
            profile.language_id,
            profile.display_name,
            ", ".join(profile.file_extensions),
            "yes" if profile.has_filter else "",
        )
    console.print(table)


if __name__ == "__main__":
    app()
