"""Authorization code exchange for the hosted-login flow"""

import json
import logging
from typing import Optional

import httpx

from .capabilities import CodeExchanger
from .constants import TOKEN_PATH
from .flow_config import FlowConfig
from .models import TokenResponse
from .pkce import PKCEManager

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
DEFAULT_EXPIRES_IN = 3600


def _coerce_expires_in(value) -> int:
    """Token lifetime in seconds, falling back to the default for missing or bad values"""
    if isinstance(value, bool):
        return DEFAULT_EXPIRES_IN
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid expires_in {value!r}, using {DEFAULT_EXPIRES_IN}")
        return DEFAULT_EXPIRES_IN


class HostedLoginTokenExchanger(CodeExchanger):
    """Exchanges a hosted-login authorization code for tokens

    Tokens from the last successful exchange are kept on ``last_tokens``.
    """

    def __init__(
        self,
        config: FlowConfig,
        pkce_manager: PKCEManager,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.pkce = pkce_manager
        self.timeout = timeout
        self.transport = transport
        self.token_endpoint = f"{config.base_url}{TOKEN_PATH}"
        self.last_tokens: Optional[TokenResponse] = None

    async def exchange(self, code: str) -> bool:
        """Exchange an authorization code for tokens

        Args:
            code: Authorization code from the callback URL

        Returns:
            True if tokens were obtained
        """
        if not self.pkce.code_verifier:
            logger.error("No code verifier available for token exchange")
            return False

        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.config.callback_uri,
            "code_verifier": self.pkce.code_verifier,
        }

        logger.info(f"Exchanging authorization code for tokens at {self.token_endpoint}")

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.post(
                    self.token_endpoint,
                    json=data,
                    headers={"Content-Type": "application/json"},
                )

            logger.debug(f"Token exchange response status: {response.status_code}")

            if response.status_code != 200:
                logger.error(f"Token exchange failed with status {response.status_code}: {response.text}")
                return False

            payload = response.json()

        except httpx.TimeoutException as e:
            logger.error(f"Token exchange timed out after {self.timeout} seconds: {e}")
            return False
        except httpx.RequestError as e:
            logger.error(f"Token exchange request failed: {e}")
            return False
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse token exchange response: {e}")
            return False

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        if not access_token:
            logger.error("Token exchange response missing access_token")
            return False

        self.last_tokens = TokenResponse(
            access_token=access_token,
            refresh_token=payload.get("refresh_token"),
            id_token=payload.get("id_token"),
            expires_in=_coerce_expires_in(payload.get("expires_in")),
        )

        # The verifier is single-use
        self.pkce.clear_pkce()

        logger.info("Successfully exchanged authorization code for tokens")
        return True
