"""
Resource Importer — Configuration
==================================
Reads settings from the process environment, optionally seeded from a
``.env`` file via python-dotenv.  Variables already present in the
environment take precedence over the file.

Usage::

    from src.resource_importer.config import Settings

    settings = Settings.from_env()
    key = settings.require("google_maps_api_key")
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from shared.python.exceptions import ConfigError
from src.resource_importer.store import DEFAULT_COLLECTION

DEFAULT_SERVICE_ACCOUNT_FILE = "service-account.json"

# Attribute name → environment variable.
ENV_VARS: dict[str, str] = {
    "project_id": "FIREBASE_PROJECT_ID",
    "private_key": "FIREBASE_PRIVATE_KEY",
    "client_email": "FIREBASE_CLIENT_EMAIL",
    "client_id": "FIREBASE_CLIENT_ID",
    "private_key_id": "FIREBASE_PRIVATE_KEY_ID",
    "account_type": "FIREBASE_TYPE",
    "auth_uri": "FIREBASE_AUTH_URI",
    "token_uri": "FIREBASE_TOKEN_URI",
    "auth_provider_cert_url": "FIREBASE_AUTH_PROVIDER_X509_CERT_URL",
    "client_cert_url": "FIREBASE_CLIENT_X509_CERT_URL",
    "google_maps_api_key": "GOOGLE_MAPS_API_KEY",
    "service_account_file": "SERVICE_ACCOUNT_FILE",
    "collection": "RESOURCE_COLLECTION",
    "environment": "ENVIRONMENT",
}


@dataclass(frozen=True)
class Settings:
    """Importer settings.  Unset optional values are ``None``."""

    project_id: str | None = None
    private_key: str | None = None
    client_email: str | None = None
    client_id: str | None = None
    private_key_id: str | None = None
    account_type: str | None = None
    auth_uri: str | None = None
    token_uri: str | None = None
    auth_provider_cert_url: str | None = None
    client_cert_url: str | None = None
    google_maps_api_key: str | None = None
    service_account_file: str = DEFAULT_SERVICE_ACCOUNT_FILE
    collection: str = DEFAULT_COLLECTION
    environment: str | None = None

    @classmethod
    def from_mapping(cls, env: Mapping[str, str]) -> Settings:
        """Build settings from an environment-like mapping.

        Empty strings count as unset.  ``FIREBASE_PRIVATE_KEY`` values that
        carry literal ``\\n`` sequences (common in ``.env`` files and CI
        secrets) are unescaped to real newlines.
        """
        values: dict[str, str] = {}
        for attr, var in ENV_VARS.items():
            raw = env.get(var)
            if raw is not None and raw.strip():
                values[attr] = raw.strip()

        if "private_key" in values:
            values["private_key"] = values["private_key"].replace("\\n", "\n")
        return cls(**values)

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> Settings:
        """Load ``.env`` (or *env_file*) and read settings from ``os.environ``."""
        if env_file is not None:
            load_dotenv(dotenv_path=env_file, override=False)
        else:
            load_dotenv(override=False)
        return cls.from_mapping(os.environ)

    @property
    def is_development(self) -> bool:
        return (self.environment or "").lower() in ("development", "dev")

    def require(self, attr: str) -> str:
        """Return the value of *attr*, raising if it is unset.

        Raises:
            ConfigError: Naming the environment variable to set.
        """
        value = getattr(self, attr)
        if not value:
            raise ConfigError(f"{ENV_VARS[attr]} is not set")
        return value

    def __repr__(self) -> str:
        shown = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "private_key" and value:
                value = "***"
            shown.append(f"{f.name}={value!r}")
        return f"Settings({', '.join(shown)})"
