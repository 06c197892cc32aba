"""Credential lookup in the ``auths`` section of a Docker ``config.json``."""

from __future__ import annotations

import base64
import json
import logging
from typing import Any

from regis_auth.registry.credentials import (
    CredentialProvider,
    CredentialsDocumentError,
    ResolvedCredential,
)

_SECTION = "Auths"


def has_registry_key(key: str, hostname: str) -> bool:
    """Return whether an ``auths`` key designates *hostname*.

    Keys are stored either as bare hosts (``registry.example.com``) or with
    a scheme (``https://registry.example.com``). Comparison ignores case.
    """
    if not isinstance(key, str):
        return False
    key = key.lower()
    hostname = hostname.lower()
    return key == hostname or key.endswith("://" + hostname)


class AuthsProvider(CredentialProvider):
    """Resolve credentials from the ``auths`` node of a Docker config document.

    Each entry holds either an ``identitytoken`` or an ``auth`` value with
    ``base64(username:password)``. When several keys match a hostname the
    last one wins. Malformed entries resolve to ``None`` so callers can fall
    back to another provider.

    Args:
        document: The parsed ``config.json`` document.
        logger: Logger receiving lookup diagnostics. Defaults to the module
            logger.
    """

    def __init__(
        self,
        document: Any,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        auths = document.get("auths") if isinstance(document, dict) else None
        self._auths: dict[str, Any] | None = auths if isinstance(auths, dict) else None
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    @classmethod
    def from_json(
        cls,
        text: str | bytes,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> AuthsProvider:
        """Build a provider from the JSON text of a ``config.json`` file.

        Raises:
            CredentialsDocumentError: If *text* is not valid JSON.
        """
        try:
            document = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CredentialsDocumentError(
                f"Invalid Docker config document: {exc}"
            ) from exc
        return cls(document, logger)

    def is_applicable(self, hostname: str) -> bool:
        """Return whether some ``auths`` key matches *hostname*."""
        if self._auths is None:
            return False
        return any(has_registry_key(key, hostname) for key in self._auths)

    def get_credential(self, hostname: str) -> ResolvedCredential | None:
        """Return the credential of the last ``auths`` key matching *hostname*.

        An ``identitytoken`` takes precedence over the ``auth`` value. Returns
        ``None`` when the entry is missing or malformed.
        """
        self._logger.debug("Searching Docker registry credential in %s section", _SECTION)

        if not self.is_applicable(hostname):
            return None

        match: tuple[str, Any] | None = None
        for key, value in self._auths.items():  # type: ignore[union-attr]
            if has_registry_key(key, hostname):
                match = (key, value)
        if match is None:
            return None

        registry, entry = match
        if not isinstance(entry, dict):
            return None

        # An identity token replaces username and password entirely.
        token = entry.get("identitytoken")
        if isinstance(token, str) and token:
            self._logger.info("Docker registry credential for %s found", hostname)
            return ResolvedCredential(registry=registry, identity_token=token)

        auth = entry.get("auth")
        if not isinstance(auth, str) or not auth:
            return None

        credential = _decode_auth(auth)
        if credential is None:
            return None

        username, password = credential
        self._logger.info("Docker registry credential for %s found", hostname)
        return ResolvedCredential(registry=registry, username=username, password=password)


def _decode_auth(auth: str) -> tuple[str, str] | None:
    """Decode ``base64(username:password)`` into a ``(username, password)`` tuple."""
    # Whitespace and line breaks inside the encoded value are ignored.
    auth = "".join(auth.split())
    try:
        decoded = base64.b64decode(auth, validate=True).decode("utf-8")
    except ValueError:
        # binascii.Error and UnicodeDecodeError both derive from ValueError.
        return None

    parts = decoded.split(":", 1)
    if len(parts) != 2:
        return None
    return parts[0], parts[1]
