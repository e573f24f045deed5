"""OAuth authorize URL construction for the hosted-login flow"""

import logging
from typing import Optional
from urllib.parse import urlencode

from .capabilities import AuthorizeUrlSource
from .constants import AUTHORIZE_PATH, SCOPE
from .flow_config import FlowConfig
from .pkce import PKCEManager

logger = logging.getLogger(__name__)


class AuthorizeUrlGenerator(AuthorizeUrlSource):
    """Builds hosted-login authorize URLs with PKCE"""

    def __init__(self, config: FlowConfig, pkce_manager: Optional[PKCEManager] = None):
        """
        Args:
            config: Flow configuration
            pkce_manager: PKCE manager shared with the code exchange (creates new if None)
        """
        self.config = config
        self.pkce = pkce_manager or PKCEManager()

    def generate(self) -> str:
        """Construct a fresh authorize URL

        Every call starts a new authorization request, replacing the stored
        code verifier.

        Returns:
            Full authorization URL
        """
        pair = self.pkce.generate_pkce()

        params = {
            "redirect_uri": self.config.callback_uri,
            "response_type": "code",
            "client_id": self.config.client_id,
            "scope": SCOPE,
            "code_challenge": pair.challenge,
            "code_challenge_method": "S256",
            "nonce": self.pkce.nonce,
            "grant_type": "authorization_code",
        }

        url = f"{self.config.base_url}{AUTHORIZE_PATH}?{urlencode(params)}"
        logger.debug(f"Generated authorize URL for client {self.config.client_id}")
        return url
