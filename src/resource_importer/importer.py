"""
Resource Importer — Spreadsheet Ingestor
=========================================
Reads resource listings from the first sheet of a spreadsheet, geocodes
rows that lack coordinates, and saves every located row to a
:class:`~src.resource_importer.store.ResourceStore`.

Each data row ends in a :class:`RowOutcome`: either *kept* (saved) or
*skipped* with a :class:`SkipReason`.  Row-level failures never stop the
batch; only an unusable input file does.

Classes:
    ColumnMap           Spreadsheet column index for each resource field.
    SkipReason          Why a row was not stored.
    RowOutcome          Result of importing one row.
    ImportSummary       Counters for a whole run.
    ResourceImporter    Primary tool class (inherits BatchTool).

Usage::

    from pathlib import Path
    from src.resource_importer.importer import ingest

    summary = ingest(Path("resource.xlsx"), api_key, store)
    print(summary.summary())
"""

from __future__ import annotations

import logging
import math
import uuid
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Sequence

import pandas as pd

from shared.python.base_tool import BatchTool
from shared.python.exceptions import (
    GeocodingError,
    StorageError,
    UnreadableSpreadsheetError,
)
from shared.python.validators import Validators
from src.resource_importer.geocoder import GeocoderBackend, GoogleBackend
from src.resource_importer.models import (
    DEFAULT_AGENCY_PROVIDER,
    DEFAULT_HOURS_OF_OPERATION,
    DEFAULT_SOURCE_SERVICE,
    GeoPoint,
    Resource,
)
from src.resource_importer.store import ResourceStore

logger = logging.getLogger("resource_importer.importer")

SUPPORTED_EXTENSIONS = [".xlsx", ".xlsm", ".csv"]
MIN_ROW_WIDTH = 8


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColumnMap:
    """0-based spreadsheet column for each resource field.

    The default layout reads column 6 both as longitude and as the
    free-text information field, matching the legacy sheet.  Sheets with
    a dedicated longitude column should pass ``longitude=<index>``.
    """

    source_service: int = 0
    contact: int = 1
    agency_provider: int = 2
    website: int = 3
    address: int = 4
    latitude: int = 5
    longitude: int = 6
    information: int = 6
    hours_of_operation: int = 7

    @property
    def width(self) -> int:
        """Number of columns every row is padded to."""
        return max(MIN_ROW_WIDTH, *(value + 1 for value in vars(self).values()))


class SkipReason(str, Enum):
    NO_COORDINATES = "no_coordinates"
    INVALID_COORDINATES = "invalid_coordinates"
    GEOCODING_FAILED = "geocoding_failed"
    STORAGE_FAILED = "storage_failed"


@dataclass(frozen=True)
class RowOutcome:
    """Result of importing a single spreadsheet row.

    Attributes:
        row_number: 1-based row number in the sheet (the header is row 1).
        resource: The stored resource when kept, else ``None``.
        reason: Why the row was skipped, else ``None``.
        detail: Extra context for a skip (e.g. the provider status).
    """

    row_number: int
    resource: Resource | None = None
    reason: SkipReason | None = None
    detail: str | None = None

    @classmethod
    def kept(cls, row_number: int, resource: Resource) -> RowOutcome:
        return cls(row_number=row_number, resource=resource)

    @classmethod
    def skipped(cls, row_number: int, reason: SkipReason, detail: str | None = None) -> RowOutcome:
        return cls(row_number=row_number, reason=reason, detail=detail)

    @property
    def is_kept(self) -> bool:
        return self.resource is not None


@dataclass
class ImportSummary:
    """Counters for a completed import run."""

    rows_processed: int = 0
    rows_stored: int = 0
    skipped: Counter = field(default_factory=Counter)

    @property
    def rows_skipped(self) -> int:
        return sum(self.skipped.values())

    def record(self, outcome: RowOutcome) -> None:
        self.rows_processed += 1
        if outcome.is_kept:
            self.rows_stored += 1
        else:
            self.skipped[outcome.reason] += 1

    def summary(self) -> str:
        """Return a human-readable summary string for logging or display."""
        parts = ", ".join(
            f"{reason.value}={count}" for reason, count in sorted(
                self.skipped.items(), key=lambda item: item[0].value
            )
        )
        text = (
            f"Processed {self.rows_processed} rows: "
            f"{self.rows_stored} stored, {self.rows_skipped} skipped"
        )
        return f"{text} ({parts})" if parts else text


# ---------------------------------------------------------------------------
# Cell helpers
# ---------------------------------------------------------------------------


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value)) or value is pd.NaT


def cell_text(value: Any) -> str | None:
    """Trimmed text of a cell, or ``None`` when the cell is empty."""
    if _is_blank(value):
        return None
    if isinstance(value, float) and value.is_integer():
        # Numeric cells such as phone numbers arrive as floats.
        value = int(value)
    text = str(value).strip()
    return text or None


def cell_number(value: Any) -> float | None:
    """Best-effort float parse of a cell; ``None`` when not a finite number."""
    if _is_blank(value) or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def pad_row(values: Sequence[Any], width: int) -> list[Any]:
    """Return *values* right-padded with ``None`` to at least *width* cells."""
    row = list(values)
    if len(row) < width:
        row.extend([None] * (width - len(row)))
    return row


# ---------------------------------------------------------------------------
# Main tool class
# ---------------------------------------------------------------------------


class ResourceImporter(BatchTool):
    """Import every data row of a spreadsheet into a resource store.

    Args:
        input_path: Spreadsheet path (``.xlsx``, ``.xlsm`` or ``.csv``).
        store: Destination for located resources.
        geocoder: Backend used for rows without coordinates.
        columns: Column layout; defaults to :class:`ColumnMap`.
        id_factory: Callable producing a fresh document id per row.
        verbose: Enable DEBUG-level logging.

    Example::

        ResourceImporter(
            Path("resource.xlsx"),
            store=FirestoreResourceStore(handles.firestore),
            geocoder=GoogleBackend(api_key),
        ).run()
    """

    def __init__(
        self,
        input_path: Path,
        store: ResourceStore,
        geocoder: GeocoderBackend,
        columns: ColumnMap | None = None,
        id_factory: Callable[[], str] | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        super().__init__(input_path, verbose=verbose)
        self.store = store
        self.geocoder = geocoder
        self.columns = columns or ColumnMap()
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))

        self._outcomes: list[RowOutcome] = []
        self._summary = ImportSummary()

    # ------------------------------------------------------------------
    # BatchTool abstract method implementations
    # ------------------------------------------------------------------

    def validate_inputs(self) -> None:
        """Check that the spreadsheet exists and has a supported extension.

        Raises:
            SpreadsheetNotFoundError: If the file is missing.
            UnreadableSpreadsheetError: If the extension is not supported.
        """
        Validators.assert_spreadsheet_exists(self.input_path)
        Validators.assert_supported_extension(self.input_path, SUPPORTED_EXTENSIONS)
        logger.debug("Inputs validated successfully.")

    def process(self) -> None:
        """Import every data row in file order.

        Raises:
            UnreadableSpreadsheetError: If the sheet cannot be read.  No
                row is processed in that case.
        """
        rows = self.read_rows()
        total = len(rows)
        logger.info("Importing %d rows from %s", total, self.input_path.name)

        outcomes: list[RowOutcome] = []
        summary = ImportSummary()
        for index, row in enumerate(rows):
            # +2: 1-based numbering plus the header row.
            outcome = self.import_row(row, row_number=index + 2)
            outcomes.append(outcome)
            summary.record(outcome)

        self._outcomes = outcomes
        self._summary = summary
        logger.info(summary.summary())

    # ------------------------------------------------------------------
    # Row handling
    # ------------------------------------------------------------------

    def read_rows(self) -> list[list[Any]]:
        """Return the data rows of the first sheet, header excluded.

        Raises:
            UnreadableSpreadsheetError: If the file cannot be parsed or
                contains no rows at all.
        """
        try:
            if self.input_path.suffix.lower() == ".csv":
                frame = pd.read_csv(
                    self.input_path, header=None, dtype=str, keep_default_na=False
                )
            else:
                frame = pd.read_excel(self.input_path, sheet_name=0, header=None, dtype=object)
        except Exception as exc:
            raise UnreadableSpreadsheetError(str(self.input_path), str(exc)) from exc

        if frame.empty:
            raise UnreadableSpreadsheetError(str(self.input_path), "the sheet has no rows")

        return [list(values) for values in frame.itertuples(index=False, name=None)][1:]

    def import_row(self, values: Sequence[Any], row_number: int) -> RowOutcome:
        """Turn one row into a stored resource or a skip decision."""
        cols = self.columns
        row = pad_row(values, cols.width)

        resource = Resource(
            id=self.id_factory(),
            source_service=cell_text(row[cols.source_service]) or DEFAULT_SOURCE_SERVICE,
            agency_provider=cell_text(row[cols.agency_provider]) or DEFAULT_AGENCY_PROVIDER,
            hours_of_operation=(
                cell_text(row[cols.hours_of_operation]) or DEFAULT_HOURS_OF_OPERATION
            ),
            contact=cell_text(row[cols.contact]),
            website=cell_text(row[cols.website]),
            address=cell_text(row[cols.address]),
            information=cell_text(row[cols.information]),
        )

        latitude = cell_number(row[cols.latitude])
        longitude = cell_number(row[cols.longitude])

        if (latitude is None or longitude is None) and resource.address:
            try:
                point = self.geocoder.geocode(resource.address)
            except GeocodingError as exc:
                logger.warning("Row %d skipped: geocoding failed — %s", row_number, exc.message)
                return RowOutcome.skipped(row_number, SkipReason.GEOCODING_FAILED, exc.message)
            latitude, longitude = point.latitude, point.longitude

        if latitude is None or longitude is None:
            logger.warning("Row %d skipped: no coordinates and no address", row_number)
            return RowOutcome.skipped(row_number, SkipReason.NO_COORDINATES)

        if not Validators.is_valid_coordinate(latitude, longitude):
            detail = f"({latitude}, {longitude})"
            logger.warning("Row %d skipped: coordinates out of range %s", row_number, detail)
            return RowOutcome.skipped(row_number, SkipReason.INVALID_COORDINATES, detail)

        located = resource.with_coordinates(GeoPoint(latitude, longitude))

        try:
            self.store.save(located)
        except StorageError as exc:
            logger.error("Error saving resource %s (row %d): %s", located.id, row_number, exc.message)
            return RowOutcome.skipped(row_number, SkipReason.STORAGE_FAILED, exc.message)

        logger.debug("Row %d stored as %s (%s)", row_number, located.id, located.geohash)
        return RowOutcome.kept(row_number, located)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    @property
    def outcomes(self) -> list[RowOutcome]:
        """Per-row outcomes from the last run, in file order, or ``[]``."""
        return self._outcomes

    @property
    def summary(self) -> ImportSummary:
        return self._summary


def ingest(
    file_path: Path,
    geocoding_api_key: str,
    store: ResourceStore,
    *,
    columns: ColumnMap | None = None,
    verbose: bool = False,
) -> ImportSummary:
    """Import *file_path* into *store*, geocoding with Google Maps.

    Raises:
        IngestError: If the spreadsheet is missing, of an unsupported type
            or unreadable.
    """
    geocoder = GoogleBackend(geocoding_api_key)
    try:
        importer = ResourceImporter(
            Path(file_path), store=store, geocoder=geocoder, columns=columns, verbose=verbose
        )
        importer.run()
    finally:
        geocoder.close()
    return importer.summary
