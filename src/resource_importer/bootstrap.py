"""
Resource Importer — Firebase Bootstrap
=======================================
Initialises the Firebase Admin SDK and hands back an owned bundle of
handles (app, Firestore client, Auth service).  Nothing is kept in module
globals: callers pass the bundle to whatever needs it and shut it down when
done.

Credentials come from one of two sources, resolved once at start-up:

* :class:`FileCredentials` — a service-account JSON file on disk.
* :class:`InlineCredentials` — service-account fields taken from the
  environment (see :mod:`src.resource_importer.config`).

Usage::

    settings = Settings.from_env()
    source = resolve_credential_source(settings)
    with initialize(source, project_id=settings.project_id) as handles:
        store = FirestoreResourceStore(handles.firestore)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from typing import Any, Union

import firebase_admin
from firebase_admin import auth, credentials, firestore

from shared.python.exceptions import BootstrapError
from src.resource_importer.config import Settings

logger = logging.getLogger("resource_importer.bootstrap")

DEFAULT_APP_NAME = "resource-importer"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
DEFAULT_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"


# ---------------------------------------------------------------------------
# Credential sources
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileCredentials:
    """Service-account credentials stored in a JSON file."""

    path: Path

    def certificate(self) -> credentials.Certificate:
        return credentials.Certificate(str(self.path))


@dataclass(frozen=True)
class InlineCredentials:
    """Service-account credentials given field by field."""

    fields: dict[str, str] = field(default_factory=dict)

    def certificate(self) -> credentials.Certificate:
        return credentials.Certificate(dict(self.fields))


CredentialSource = Union[FileCredentials, InlineCredentials]


def resolve_credential_source(settings: Settings) -> CredentialSource:
    """Pick the service-account file if it exists, else the environment.

    Raises:
        ConfigError: If the file is absent and the project id, private key
            or client email variables are not set.
    """
    path = Path(settings.service_account_file)
    if path.is_file():
        logger.debug("Using service account file %s", path)
        return FileCredentials(path)

    logger.debug("Service account file %s not found; using environment", path)
    info = {
        "type": settings.account_type or "service_account",
        "project_id": settings.require("project_id"),
        "private_key": settings.require("private_key"),
        "client_email": settings.require("client_email"),
        "token_uri": settings.token_uri or DEFAULT_TOKEN_URI,
        "auth_uri": settings.auth_uri or DEFAULT_AUTH_URI,
    }
    optional = {
        "client_id": settings.client_id,
        "private_key_id": settings.private_key_id,
        "auth_provider_x509_cert_url": settings.auth_provider_cert_url,
        "client_x509_cert_url": settings.client_cert_url,
    }
    info.update({key: value for key, value in optional.items() if value})
    return InlineCredentials(info)


# ---------------------------------------------------------------------------
# Handles
# ---------------------------------------------------------------------------


class AuthService:
    """Firebase Authentication calls bound to one app."""

    def __init__(self, app: firebase_admin.App) -> None:
        self.app = app

    def get_user(self, uid: str) -> auth.UserRecord:
        return auth.get_user(uid, app=self.app)

    def get_user_by_email(self, email: str) -> auth.UserRecord:
        return auth.get_user_by_email(email, app=self.app)

    def verify_id_token(self, id_token: str, check_revoked: bool = False) -> dict[str, Any]:
        return auth.verify_id_token(id_token, app=self.app, check_revoked=check_revoked)

    def create_custom_token(self, uid: str, claims: dict[str, Any] | None = None) -> bytes:
        return auth.create_custom_token(uid, developer_claims=claims, app=self.app)


class FirebaseHandles:
    """Owned bundle of Firebase Admin handles.

    Attributes:
        app: The initialised :class:`firebase_admin.App`.
        firestore: Firestore client for *app*.
        auth: :class:`AuthService` bound to *app*.
    """

    def __init__(self, app: firebase_admin.App, firestore_client: Any) -> None:
        self.app = app
        self.firestore = firestore_client
        self.auth = AuthService(app)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def shutdown(self) -> None:
        """Delete the Firebase app.  Safe to call more than once."""
        if self._closed:
            return
        firebase_admin.delete_app(self.app)
        self._closed = True
        logger.debug("Firebase app %s deleted", self.app.name)

    def __enter__(self) -> FirebaseHandles:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()


def initialize(
    source: CredentialSource,
    project_id: str | None = None,
    app_name: str = DEFAULT_APP_NAME,
) -> FirebaseHandles:
    """Initialise a named Firebase app from *source*.

    Args:
        source: Where the service-account credentials come from.
        project_id: Overrides the project id from the credentials.
        app_name: Firebase app name; must not already be initialised.

    Raises:
        BootstrapError: If the credentials are invalid or the SDK refuses
            to start.
    """
    options = {"projectId": project_id} if project_id else None
    try:
        app = firebase_admin.initialize_app(source.certificate(), options=options, name=app_name)
    except (ValueError, OSError) as exc:
        raise BootstrapError(f"Failed to initialize Firebase Admin SDK: {exc}") from exc

    try:
        client = firestore.client(app=app)
    except ValueError as exc:
        firebase_admin.delete_app(app)
        raise BootstrapError(f"Failed to create Firestore client: {exc}") from exc

    logger.info("Firebase Admin SDK initialised for project %s", app.project_id)
    return FirebaseHandles(app, client)
