"""PKCE (Proof Key for Code Exchange) generation for the hosted-login flow"""

import base64
import hashlib
import secrets
from typing import Optional

from .models import PKCEPair


class PKCEManager:
    """Holds the code verifier of the authorization request in flight

    Values live in memory only; each generated authorize URL replaces them.
    """

    def __init__(self):
        self.code_verifier: Optional[str] = None
        self.nonce: Optional[str] = None

    def generate_pkce(self) -> PKCEPair:
        """Generate PKCE code verifier and challenge

        RFC 7636: 32 random bytes -> 43 character base64url verifier,
        challenge is the base64url SHA-256 of the verifier.

        Returns:
            PKCEPair of (verifier, challenge)
        """
        verifier = secrets.token_urlsafe(32)
        digest = hashlib.sha256(verifier.encode("utf-8")).digest()
        challenge = base64.urlsafe_b64encode(digest).decode("utf-8").rstrip("=")

        self.code_verifier = verifier
        self.nonce = secrets.token_urlsafe(16)
        return PKCEPair(verifier=verifier, challenge=challenge)

    def clear_pkce(self) -> None:
        """Clear PKCE values after use"""
        self.code_verifier = None
        self.nonce = None
