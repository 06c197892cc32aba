"""Registry credential resolution from Docker ``config.json`` documents."""

from regis_auth.registry.auths import AuthsProvider, has_registry_key
from regis_auth.registry.credentials import (
    CredentialProvider,
    CredentialsDocumentError,
    ResolvedCredential,
)
from regis_auth.registry.schema import validate_document

__all__ = [
    "AuthsProvider",
    "CredentialProvider",
    "CredentialsDocumentError",
    "ResolvedCredential",
    "has_registry_key",
    "validate_document",
]
