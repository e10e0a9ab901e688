"""
Agency Access

Decides whether a caller may see agency-side figures. This gates display
and export only; the engine computes agency figures for every settlement.
"""

import hmac
from typing import Protocol


class AccessAuthorizer(Protocol):
    """Anything that can answer whether a credential grants agency access."""

    def has_elevated_access(self, credential: str | None) -> bool:
        ...


class StaticPassphraseAuthorizer:
    """Compares the credential with a configured passphrase."""

    def __init__(self, passphrase: str):
        self._passphrase = passphrase or ""

    def has_elevated_access(self, credential: str | None) -> bool:
        # No passphrase configured means agency access is off
        if not self._passphrase or not credential:
            return False
        return hmac.compare_digest(credential.encode("utf-8"), self._passphrase.encode("utf-8"))


class DenyAllAuthorizer:
    def has_elevated_access(self, credential: str | None) -> bool:
        return False


def build_authorizer(passphrase: str | None) -> AccessAuthorizer:
    """Authorizer for the configured passphrase, deny-all when unset."""
    if passphrase:
        return StaticPassphraseAuthorizer(passphrase)
    return DenyAllAuthorizer()
