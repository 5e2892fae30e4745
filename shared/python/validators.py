"""
Resource Importer — Shared Input Validators
============================================
Static utility methods used to validate common preconditions before a
tool starts processing.

All methods raise an appropriate exception from
:mod:`shared.python.exceptions` rather than returning booleans — this
keeps ``validate_inputs`` implementations simple and readable::

    class MyTool(BatchTool):
        def validate_inputs(self) -> None:
            Validators.assert_spreadsheet_exists(self.input_path)
            Validators.assert_supported_extension(self.input_path, [".xlsx"])
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Sequence

from shared.python.exceptions import (
    SpreadsheetNotFoundError,
    UnreadableSpreadsheetError,
)


class Validators:
    """Collection of static precondition checks.

    All methods are ``@staticmethod`` — this class is never instantiated.
    It exists purely as a logical namespace.
    """

    # ------------------------------------------------------------------
    # File-system checks
    # ------------------------------------------------------------------

    @staticmethod
    def assert_spreadsheet_exists(path: Path) -> None:
        """Assert that *path* points to an existing regular file.

        Args:
            path: Path object to check.

        Raises:
            SpreadsheetNotFoundError: If *path* does not exist or is a
                directory rather than a file.

        Example::

            Validators.assert_spreadsheet_exists(Path("resource.xlsx"))
        """
        path = Path(path)
        if not path.is_file():
            raise SpreadsheetNotFoundError(str(path))

    @staticmethod
    def assert_supported_extension(path: Path, extensions: Sequence[str]) -> None:
        """Assert that *path* has one of the allowed file extensions.

        Args:
            path: File path to check.
            extensions: Sequence of allowed extensions, each starting with
                        a dot (e.g. ``[".xlsx", ".csv"]``).

        Raises:
            UnreadableSpreadsheetError: If the file extension is not in
                *extensions*.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        allowed = [ext.lower() for ext in extensions]
        if suffix not in allowed:
            raise UnreadableSpreadsheetError(
                str(path),
                f"unsupported file extension '{suffix}' "
                f"(accepted: {', '.join(allowed)})",
            )

    # ------------------------------------------------------------------
    # Coordinate checks
    # ------------------------------------------------------------------

    @staticmethod
    def is_valid_coordinate(latitude: float, longitude: float) -> bool:
        """Return ``True`` if the pair is finite and inside WGS84 bounds.

        Unlike the ``assert_*`` helpers this returns a boolean, because an
        out-of-range pair is a per-row skip rather than a fatal input error.
        """
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            return False
        return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0
