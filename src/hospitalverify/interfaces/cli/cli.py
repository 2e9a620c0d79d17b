"""Command-line interface for hospital verification."""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

# Set UTF-8 encoding for Windows compatibility
if sys.platform == "win32":
    os.environ["PYTHONIOENCODING"] = "utf-8"

from httpx import AsyncClient
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...application.form_validator import validate_emergency_form
from ...application.verifier import HospitalVerificationService
from ...config.settings import Settings, get_settings
from ...domain.models import Coordinates, EmergencyFundingForm, VerificationResult
from ...infrastructure.http.client import HTTPClientFactory
from ...infrastructure.location import LocationProvider
from ...infrastructure.search.places_client import PlacesSearchClient
from ...utils.log import init_logging

console = Console(force_terminal=True, legacy_windows=False)


def _create_search_client(settings: Settings, http_client: AsyncClient) -> PlacesSearchClient:
    return PlacesSearchClient(
        api_key=settings.places_api_key,
        http_client=http_client,
        base_url=settings.places_base_url,
        api_host=settings.places_api_host,
        radius_meters=settings.search_radius_meters,
        language_code=settings.search_language_code,
        region_code=settings.search_region_code,
    )


def _create_verification_service(
    settings: Settings, http_client: AsyncClient
) -> HospitalVerificationService:
    """Create and configure verification service with dependency injection."""
    return HospitalVerificationService(search_client=_create_search_client(settings, http_client))


def _print_error(message: str) -> None:
    console.print(
        Panel(
            f"[red]Error:[/red] {message}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        )
    )


def _print_header(name: str, location: str) -> None:
    header = Panel(
        Text(f"{name}\n{location}", style="bold bright_white"),
        title="[bold cyan]Verifying Hospital[/bold cyan]",
        border_style="cyan",
        padding=(1, 2),
    )
    console.print(header)
    console.print()


def _print_result(result: VerificationResult, json_output: bool = False) -> None:
    """Print verification result to console.

    Args:
        result: VerificationResult to print.
        json_output: If True, output as JSON. Otherwise, print formatted text.
    """
    if json_output:
        console.print_json(result.model_dump_json())
        return

    color, label = ("green", "[OK] Verified") if result.exists else ("red", "[X] Not verified")
    verdict_text = Text(label, style=f"bold {color}")
    if result.confidence is not None:
        verdict_text.append(f"  confidence {result.confidence:.2f}", style="dim white")
    console.print(Panel(verdict_text, border_style=color, padding=(0, 2)))
    console.print(result.message)
    console.print()

    if result.suggestions:
        _print_suggestions(result.suggestions, title="Suggestions")


def _print_suggestions(suggestions: List[str], title: str) -> None:
    table = Table(
        title=f"[bold]{title}[/bold]",
        show_header=True,
        header_style="bold magenta",
        border_style="magenta",
        padding=(0, 1),
    )
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Place", style="cyan", no_wrap=False)
    for i, suggestion in enumerate(suggestions, 1):
        table.add_row(str(i), suggestion)
    console.print(table)


async def _resolve_coordinates(
    args: argparse.Namespace, settings: Settings, http_client: AsyncClient
) -> Optional[Coordinates]:
    if args.coordinates is not None:
        return args.coordinates
    if args.locate:
        provider = LocationProvider(http_client, url=settings.geolocation_url)
        return await provider.get_current_location()
    return None


async def _verify(args: argparse.Namespace, settings: Settings) -> int:
    async with HTTPClientFactory.create(settings.http_timeout_seconds) as http_client:
        service = _create_verification_service(settings, http_client)
        coordinates = await _resolve_coordinates(args, settings, http_client)
        if not args.json:
            _print_header(args.name, args.location)
            with console.status("[cyan]Searching places...[/cyan]", spinner="dots"):
                result = await service.verify_hospital(args.name, args.location, coordinates)
        else:
            result = await service.verify_hospital(args.name, args.location, coordinates)
    _print_result(result, json_output=args.json)
    return 0


async def _search(args: argparse.Namespace, settings: Settings) -> int:
    async with HTTPClientFactory.create(settings.http_timeout_seconds) as http_client:
        service = _create_verification_service(settings, http_client)
        coordinates = await _resolve_coordinates(args, settings, http_client)
        hospitals = await service.search_hospitals_in_location(args.search, coordinates)
    if args.json:
        console.print_json(json.dumps(hospitals))
    elif hospitals:
        _print_suggestions(hospitals, title=f"Hospitals in {args.search}")
    else:
        console.print(f"[yellow]No hospitals found in {args.search}.[/yellow]")
    return 0


async def _check(settings: Settings) -> int:
    async with HTTPClientFactory.create(settings.http_timeout_seconds) as http_client:
        report = await _create_search_client(settings, http_client).check_connectivity()
    style = "green" if report.success else "red"
    console.print(f"[{style}]{report.message}[/{style}]")
    return 0 if report.success else 1


def _validate_form(path: str, json_output: bool) -> int:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        form = EmergencyFundingForm.model_validate(raw)
    except (OSError, ValueError, ValidationError) as e:
        _print_error(f"Could not read form {path}: {e}")
        return 1

    result = validate_emergency_form(form)
    if json_output:
        console.print_json(result.model_dump_json())
    elif result.is_valid:
        console.print("[green]Form is valid.[/green]")
    else:
        for error in result.errors:
            console.print(f"[red]-[/red] {error}")
    return 0 if result.is_valid else 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hospitalverify",
        description="Check that a hospital plausibly exists at a location.",
    )
    parser.add_argument("name", nargs="*", help="Hospital name to verify")
    parser.add_argument("-l", "--location", help="Where the hospital is located")
    parser.add_argument("--search", metavar="LOCATION", help="List hospitals in a location")
    parser.add_argument("--check", action="store_true", help="Test places API connectivity")
    parser.add_argument(
        "--validate-form", metavar="FILE", help="Validate an emergency funding form (JSON)"
    )
    parser.add_argument("--lat", type=float, help="Latitude used to bias the search")
    parser.add_argument("--lon", type=float, help="Longitude used to bias the search")
    parser.add_argument(
        "--locate", action="store_true", help="Look up the current position to bias the search"
    )
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Usage:
        hospitalverify <name> --location <location>   # Verify a hospital
        hospitalverify --search <location>            # List hospitals
        hospitalverify --check                        # Test API connectivity
        hospitalverify --validate-form form.json      # Validate a funding form

    Returns:
        Exit code (0 for success, 1 for error).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    init_logging(settings.log_level)

    if (args.lat is None) != (args.lon is None):
        _print_error("--lat and --lon must be given together")
        return 1
    args.coordinates = None
    if args.lat is not None:
        try:
            args.coordinates = Coordinates(latitude=args.lat, longitude=args.lon)
        except ValidationError:
            _print_error("--lat must be within [-90, 90] and --lon within [-180, 180]")
            return 1

    if args.validate_form:
        return _validate_form(args.validate_form, args.json)
    if args.check:
        return asyncio.run(_check(settings))
    if args.search:
        return asyncio.run(_search(args, settings))

    args.name = " ".join(args.name)
    if not args.name.strip() or not (args.location or "").strip():
        _print_error("A hospital name and --location are required")
        parser.print_usage()
        return 1

    return asyncio.run(_verify(args, settings))


if __name__ == "__main__":
    sys.exit(main())
