"""Credential value types shared by registry credential providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class CredentialsDocumentError(Exception):
    """Raised when a credentials document cannot be parsed or validated."""


@dataclass(frozen=True)
class ResolvedCredential:
    """Credential resolved for a registry.

    Either ``identity_token`` or the ``username``/``password`` pair is set,
    never both.

    Attributes:
        registry: The registry key the credential was found under
            (e.g. ``https://registry.example.com``).
        username: User name for basic authentication.
        password: Password for basic authentication.
        identity_token: Registry-issued token replacing username and password.
    """

    registry: str
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    identity_token: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        has_basic = self.username is not None or self.password is not None
        if self.identity_token is not None:
            if has_basic:
                raise ValueError("Credential cannot hold both an identity token and a username/password")
        elif self.username is None or self.password is None:
            raise ValueError("Credential needs an identity token or both a username and a password")

    @property
    def is_token(self) -> bool:
        """Return ``True`` if this credential carries an identity token."""
        return self.identity_token is not None

    def to_dict(self) -> dict[str, Any]:
        """Return the credential in Docker Engine auth-config form."""
        data: dict[str, Any] = {"serveraddress": self.registry}
        for key, value in (
            ("username", self.username),
            ("password", self.password),
            ("identitytoken", self.identity_token),
        ):
            if value is not None:
                data[key] = value
        return data


class CredentialProvider(ABC):
    """Abstract base class for registry credential sources.

    Callers check :meth:`is_applicable` to decide whether to query a
    provider, and move on to the next one when :meth:`get_credential`
    returns ``None``.
    """

    @abstractmethod
    def is_applicable(self, hostname: str) -> bool:
        """Return whether this provider may hold a credential for *hostname*."""

    @abstractmethod
    def get_credential(self, hostname: str) -> ResolvedCredential | None:
        """Return the credential for *hostname*, or ``None``.

        Args:
            hostname: Registry host without scheme or path
                (e.g. ``registry.example.com``).
        """
