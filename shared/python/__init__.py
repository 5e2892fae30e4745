"""
Resource Importer — Shared Python Package
==========================================
Re-exports the shared base class, exception hierarchy, and validator
utilities so tool modules can import from a single location::

    from shared.python import BatchTool, Validators
    from shared.python.exceptions import GeocodingError
"""

from shared.python.base_tool import BatchTool, configure_logging
from shared.python.exceptions import (
    BootstrapError,
    ConfigError,
    GeocodingError,
    GeocodingTransportError,
    ImporterError,
    IngestError,
    MalformedResponseError,
    MissingRequiredFieldError,
    ProviderRejectedError,
    RecordError,
    SpreadsheetNotFoundError,
    StorageError,
    UnreadableSpreadsheetError,
)
from shared.python.validators import Validators

__all__ = [
    "BatchTool",
    "configure_logging",
    "Validators",
    "ImporterError",
    "IngestError",
    "SpreadsheetNotFoundError",
    "UnreadableSpreadsheetError",
    "GeocodingError",
    "ProviderRejectedError",
    "MalformedResponseError",
    "GeocodingTransportError",
    "RecordError",
    "MissingRequiredFieldError",
    "StorageError",
    "ConfigError",
    "BootstrapError",
]
