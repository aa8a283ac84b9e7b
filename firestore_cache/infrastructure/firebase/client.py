"""Firestore client construction (REST-based, no firebase-admin).

Credentials come from either FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or
FIREBASE_SERVICE_ACCOUNT_PATH (file path). FIREBASE_PROJECT_ID overrides the
project from the service account.
"""

import json
import logging
from pathlib import Path

from firestore_cache.core.config import Settings, get_settings
from firestore_cache.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def build_firestore_client(settings: Settings | None = None) -> FirestoreRESTClient | None:
    """Build a Firestore client from settings.

    Returns:
        A client, or None when no service account is configured.

    Raises:
        ValueError: If the key is not valid JSON or no project ID is available.
    """
    settings = settings or get_settings()
    key_dict = _load_key_dict(settings)
    if not key_dict:
        logger.info("Firestore not configured (no service account key or path)")
        return None
    project_id = settings.firebase_project_id or key_dict.get("project_id")
    if not project_id:
        raise ValueError(
            "Firebase service account JSON missing 'project_id' and FIREBASE_PROJECT_ID not set"
        )
    credentials = _get_credentials(key_dict)
    client = FirestoreRESTClient(
        project_id, credentials, timeout=settings.firestore_timeout_seconds
    )
    logger.info("Firestore client initialized for project %s", project_id)
    return client
