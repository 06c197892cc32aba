"""Strict validation of Docker config documents."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any

import jsonschema

from regis_auth.registry.credentials import CredentialsDocumentError

logger = logging.getLogger(__name__)

_SCHEMA_FILE = "docker_config.schema.json"


def validate_document(document: Any) -> None:
    """Validate *document* against the Docker config ``auths`` schema.

    Credential lookup never needs this: :class:`AuthsProvider` silently skips
    malformed entries. Use it to report why a lookup came back empty.

    Args:
        document: The parsed ``config.json`` document.

    Raises:
        CredentialsDocumentError: If the document does not conform to the schema.
    """
    try:
        jsonschema.validate(instance=document, schema=load_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        logger.debug("Docker config document invalid at %s: %s", location, exc.message)
        raise CredentialsDocumentError(
            f"Docker config document failed schema validation at {location}: {exc.message}"
        ) from exc


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    """Load the JSON Schema file from the ``regis_auth.schemas`` package."""
    schema_ref = resources.files("regis_auth.schemas").joinpath(_SCHEMA_FILE)
    schema_text = schema_ref.read_text(encoding="utf-8")
    return json.loads(schema_text)  # type: ignore[no-any-return]
