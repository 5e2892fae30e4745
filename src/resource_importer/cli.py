"""
Resource Importer — CLI Entry Point
====================================
Installed as the ``resource-import`` command via ``pyproject.toml``.

Usage:
    resource-import --input resource.xlsx --collection resources \\
                    --google-api-key "$GOOGLE_MAPS_API_KEY"

Firebase credentials are read from ``service-account.json`` when present,
otherwise from the ``FIREBASE_*`` environment variables (a ``.env`` file is
loaded first).
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

import click

from shared.python.base_tool import configure_logging
from shared.python.exceptions import ImporterError
from src.resource_importer.bootstrap import initialize, resolve_credential_source
from src.resource_importer.config import Settings
from src.resource_importer.geocoder import GoogleBackend
from src.resource_importer.importer import ColumnMap, ResourceImporter
from src.resource_importer.store import FirestoreResourceStore


@click.command(
    name="resource-import",
    help="Import resource listings from a spreadsheet into Firestore.",
)
@click.option(
    "--input", "-i", "input_path",
    required=True,
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    help="Spreadsheet to import (.xlsx, .xlsm or .csv). Row 1 is the header.",
)
@click.option(
    "--google-api-key",
    default=None,
    help="Google Maps API key. Defaults to GOOGLE_MAPS_API_KEY.",
)
@click.option(
    "--collection",
    default=None,
    help="Firestore collection to write to. Defaults to RESOURCE_COLLECTION or 'resources'.",
)
@click.option(
    "--service-account",
    "service_account",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Service-account JSON file. Defaults to SERVICE_ACCOUNT_FILE or service-account.json.",
)
@click.option(
    "--env-file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Load environment variables from this file instead of ./.env.",
)
@click.option(
    "--longitude-col",
    default=None,
    type=click.IntRange(min=0),
    help="0-based column holding longitude when it is not column 6.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def main(
    input_path: Path,
    google_api_key: str | None,
    collection: str | None,
    service_account: Path | None,
    env_file: Path | None,
    longitude_col: int | None,
    verbose: bool,
) -> None:
    """CLI entry point — wires settings, Firebase and the importer together."""
    configure_logging(verbose=verbose)
    columns = ColumnMap(longitude=longitude_col) if longitude_col is not None else ColumnMap()

    try:
        settings = Settings.from_env(env_file)
        api_key = google_api_key or settings.require("google_maps_api_key")
        if service_account is not None:
            settings = dataclasses.replace(settings, service_account_file=str(service_account))

        source = resolve_credential_source(settings)
        with initialize(source, project_id=settings.project_id) as handles:
            store = FirestoreResourceStore(handles.firestore, collection or settings.collection)
            geocoder = GoogleBackend(api_key)
            try:
                tool = ResourceImporter(
                    input_path, store=store, geocoder=geocoder, columns=columns, verbose=verbose
                )
                tool.run()
            finally:
                geocoder.close()
    except ImporterError as exc:
        click.secho(f"Error: {exc.message}", fg="red", err=True)
        raise SystemExit(1) from exc

    click.echo(tool.summary.summary())


if __name__ == "__main__":
    main()
