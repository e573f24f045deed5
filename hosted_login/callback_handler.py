"""Hosted-login callback handling"""

import logging
from functools import partial
from typing import Callable, Optional
from urllib.parse import parse_qs, urlparse

from .capabilities import AuthorizeUrlSource, BrowsingSurface, CodeExchanger
from .constants import CODE_PARAM
from .event_stream import EventStream
from .models import CANCEL, LoadURL, NavigationDecision

logger = logging.getLogger(__name__)


def extract_code(url: str) -> Optional[str]:
    """Get the authorization code from a callback URL

    Returns:
        The first non-empty code value, or None
    """
    try:
        query = parse_qs(urlparse(url).query)
    except ValueError:
        return None
    for value in query.get(CODE_PARAM, []):
        if value:
            return value
    return None


class HostedLoginCallbackHandler:
    """Exchanges the callback's authorization code and restarts the flow on failure

    The exchange runs as a background task; its result is applied on the event
    stream and dropped if the navigation generation it was issued for is stale.
    """

    def __init__(
        self,
        authorize_urls: AuthorizeUrlSource,
        exchanger: CodeExchanger,
        surface: BrowsingSurface,
        stream: EventStream,
        is_current: Callable[[int], bool],
    ):
        self.authorize_urls = authorize_urls
        self.exchanger = exchanger
        self.surface = surface
        self.stream = stream
        self.is_current = is_current

    def handle_callback(self, url: str, generation: int) -> NavigationDecision:
        """Handle a hosted-login callback URL

        Args:
            url: Callback URL
            generation: Navigation generation the callback belongs to

        Returns:
            Always Cancel; the callback URL is never rendered
        """
        logger.debug(f"handleHostedLoginCallback, url: {url}")
        code = extract_code(url)
        if not code:
            logger.error("Failed to extract code from hosted login callback url")
            logger.info("Restarting the flow with a new authorize url")
            self.restart_flow()
            return CANCEL

        self.stream.spawn(
            self.exchanger.exchange(code),
            on_result=partial(self._on_exchange_result, generation),
            on_error=partial(self._on_exchange_error, generation),
            name="hosted-login-code-exchange",
        )
        return CANCEL

    def restart_flow(self) -> None:
        """Load a freshly generated authorize URL"""
        self.surface.execute(LoadURL(self.authorize_urls.generate()))

    def _on_exchange_result(self, generation: int, success: bool) -> None:
        if not self.is_current(generation):
            logger.warning(f"Discarding code exchange result from superseded navigation {generation}")
            return
        if success:
            logger.info("Hosted login completed")
            return
        logger.warning("Code exchange failed, restarting the flow")
        self.restart_flow()

    def _on_exchange_error(self, generation: int, error: BaseException) -> None:
        logger.error(f"Code exchange raised: {error}")
        self._on_exchange_result(generation, False)
