"""
Resource Importer — Custom Exception Hierarchy
===============================================
Every module in the importer raises exceptions from this module so callers
can catch them at the right level of granularity.

Hierarchy::

    ImporterError                        ← catch-all base
    ├── IngestError                      ← input spreadsheet cannot be used
    │   ├── SpreadsheetNotFoundError     ← file does not exist
    │   └── UnreadableSpreadsheetError   ← unsupported type or not parseable
    ├── GeocodingError                   ← geocoder API / parse failures
    │   ├── ProviderRejectedError        ← status field other than "OK"
    │   ├── MalformedResponseError       ← expected JSON structure absent
    │   └── GeocodingTransportError      ← network / HTTP-level failure
    ├── RecordError                      ← persisted representation invalid
    │   └── MissingRequiredFieldError    ← required key absent
    ├── StorageError                     ← document store rejected a call
    ├── ConfigError                      ← missing / invalid settings
    └── BootstrapError                   ← Firebase Admin SDK init failed

Usage::

    from shared.python.exceptions import ProviderRejectedError

    raise ProviderRejectedError("ZERO_RESULTS")
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class ImporterError(Exception):
    """Base exception for the resource importer.

    Catch this to handle any importer-specific error without caring about
    the exact subtype.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ---------------------------------------------------------------------------
# Ingest (fatal for the whole run)
# ---------------------------------------------------------------------------


class IngestError(ImporterError):
    """Raised when the input spreadsheet cannot be used at all.

    Always fatal: the run aborts before any document is written.
    """


class SpreadsheetNotFoundError(IngestError):
    """Raised when the spreadsheet path does not point to a file.

    Args:
        path: String form of the missing path.
    """

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Spreadsheet not found: '{path}'. "
            "Check that the path is correct and the file exists."
        )
        self.path: str = path


class UnreadableSpreadsheetError(IngestError):
    """Raised when the file exists but cannot be parsed as tabular data.

    Args:
        path: String form of the offending path.
        reason: Short explanation, usually the reader's own message.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read spreadsheet '{path}': {reason}")
        self.path: str = path
        self.reason: str = reason


# ---------------------------------------------------------------------------
# Geocoding (row-local)
# ---------------------------------------------------------------------------


class GeocodingError(ImporterError):
    """Raised when a geocoding operation fails for any reason.

    The importer treats every subclass as "skip this row".
    """


class ProviderRejectedError(GeocodingError):
    """Raised when the provider answers with a status other than ``OK``.

    Args:
        status: The status string returned by the API
                (e.g. ``"ZERO_RESULTS"``, ``"REQUEST_DENIED"``).

    Example::

        raise ProviderRejectedError("ZERO_RESULTS")
    """

    def __init__(self, status: str) -> None:
        super().__init__(f"Geocoding provider rejected the request: {status}")
        self.status: str = status


class MalformedResponseError(GeocodingError):
    """Raised when the response body lacks the expected structure."""


class GeocodingTransportError(GeocodingError):
    """Raised for connection errors, timeouts and non-2xx HTTP statuses."""


# ---------------------------------------------------------------------------
# Record model
# ---------------------------------------------------------------------------


class RecordError(ImporterError):
    """Raised when a persisted representation cannot be turned into a record."""


class MissingRequiredFieldError(RecordError):
    """Raised when a required key is absent from a persisted representation.

    Args:
        field: The missing key, in its persisted (camelCase) spelling.
    """

    def __init__(self, field: str) -> None:
        super().__init__(f"Required field '{field}' is missing.")
        self.field: str = field


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


class StorageError(ImporterError):
    """Raised when the document store rejects a read or write.

    Args:
        document_id: Identifier of the document involved.
        reason: Underlying client error message.
    """

    def __init__(self, document_id: str, reason: str) -> None:
        super().__init__(f"Storage call failed for document '{document_id}': {reason}")
        self.document_id: str = document_id
        self.reason: str = reason


# ---------------------------------------------------------------------------
# Configuration / bootstrap
# ---------------------------------------------------------------------------


class ConfigError(ImporterError):
    """Raised for missing or invalid configuration values.

    Example::

        raise ConfigError("FIREBASE_PROJECT_ID is not set")
    """


class BootstrapError(ImporterError):
    """Raised when the Firebase Admin SDK cannot be initialised."""
