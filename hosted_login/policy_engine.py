"""Navigation policy engine for the hosted-login browsing surface

The engine receives the navigation lifecycle events of one browsing surface,
classifies each URL and decides whether the navigation proceeds. All entry
points must be called from the event loop that runs the engine's
``EventStream``; background work (external browser hand-off, code exchange,
reading an error body) posts its result back onto that stream.
"""

import json
import logging
from functools import partial
from typing import Callable, Optional
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from .authorization import AuthorizeUrlGenerator
from .callback_handler import HostedLoginCallbackHandler
from .capabilities import (
    AuthorizeUrlSource,
    BrowsingSurface,
    CodeExchanger,
    ExternalOpener,
    SystemBrowserOpener,
)
from .constants import NAVIGATION_INTERRUPTED_CODE, REDIRECT_URI_PARAM, UNKNOWN_ERROR_MESSAGE
from .error_page import render_error_page
from .event_stream import EventStream
from .flow_config import FlowConfig
from .models import (
    ALLOW,
    CANCEL,
    LoadURL,
    NavigationDecision,
    NavigationError,
    OpenExternally,
    RouteCategory,
    ShowErrorPage,
)
from .pkce import PKCEManager
from .state import AuthFlowState
from .status_tracker import ResponseStatusTracker, is_json_error_response
from .token_exchange import HostedLoginTokenExchanger
from .url_classifier import classify

logger = logging.getLogger(__name__)

ErrorPageRenderer = Callable[[str, str, int], str]


def has_redirect_uri(url: str) -> bool:
    query = urlparse(url).query
    return any(key == REDIRECT_URI_PARAM for key, _ in parse_qsl(query, keep_blank_values=True))


def append_redirect_uri(url: str, redirect_uri: str) -> str:
    """Append the redirectUri query parameter, keeping the existing query as is"""
    parts = urlparse(url)
    extra = urlencode({REDIRECT_URI_PARAM: redirect_uri})
    query = f"{parts.query}&{extra}" if parts.query else extra
    return urlunparse(parts._replace(query=query))


def extract_error_message(document_text: Optional[str]) -> str:
    """Join the ``errors`` array of a JSON error body

    Returns:
        Newline-joined errors, or a generic message when the body is not a
        JSON object with a non-empty errors array
    """
    try:
        payload = json.loads(document_text or "")
    except (TypeError, ValueError):
        return UNKNOWN_ERROR_MESSAGE

    errors = payload.get("errors") if isinstance(payload, dict) else None
    if not isinstance(errors, list) or not errors:
        return UNKNOWN_ERROR_MESSAGE
    return "\n".join(str(error) for error in errors)


class NavigationPolicyEngine:
    """Decides the fate of every navigation in a hosted-login browsing surface"""

    def __init__(
        self,
        config: FlowConfig,
        surface: BrowsingSurface,
        opener: Optional[ExternalOpener] = None,
        authorize_urls: Optional[AuthorizeUrlSource] = None,
        exchanger: Optional[CodeExchanger] = None,
        stream: Optional[EventStream] = None,
        state: Optional[AuthFlowState] = None,
        render_error: ErrorPageRenderer = render_error_page,
    ):
        """
        Args:
            config: Route configuration of the flow
            surface: Browsing surface receiving follow-up commands
            opener: System browser capability (defaults to webbrowser)
            authorize_urls: Authorize URL source (defaults to a PKCE generator)
            exchanger: Code exchange collaborator (defaults to the httpx exchanger)
            stream: Event stream background results are posted to
            state: Flow state shared with the UI layer
            render_error: Error page renderer
        """
        self.config = config
        self.surface = surface
        self.opener = opener or SystemBrowserOpener()

        if authorize_urls is None or exchanger is None:
            pkce = PKCEManager()
            authorize_urls = authorize_urls or AuthorizeUrlGenerator(config, pkce)
            exchanger = exchanger or HostedLoginTokenExchanger(config, pkce)
        self.authorize_urls = authorize_urls
        self.exchanger = exchanger

        self.stream = stream or EventStream()
        self.state = state or AuthFlowState()
        self.render_error = render_error
        self.tracker = ResponseStatusTracker()

        self.generation = 0
        self.closed = False
        self.current_url: Optional[str] = None

        self.callbacks = HostedLoginCallbackHandler(
            authorize_urls=self.authorize_urls,
            exchanger=self.exchanger,
            surface=self.surface,
            stream=self.stream,
            is_current=self.is_current,
        )

    def is_current(self, generation: int) -> bool:
        """Check whether async results issued for a generation still apply"""
        return not self.closed and generation == self.generation

    def classify(self, url: str) -> RouteCategory:
        category = classify(url, self.config)
        logger.info(f"urlType: {category}, for: {url}")
        return category

    # Navigation lifecycle

    def begin(self) -> LoadURL:
        """Start the flow by loading a freshly generated authorize URL

        The authorize request creates the code verifier the callback
        exchange needs.
        """
        self.generation += 1
        command = LoadURL(self.authorize_urls.generate())
        logger.info("Starting hosted login flow")
        self.surface.execute(command)
        return command

    def decide(self, url: Optional[str]) -> NavigationDecision:
        """Decide whether a navigation may start"""
        self.generation += 1
        if not url:
            logger.warning("Failed to get url from navigation action")
            self.state.set_loading(False)
            return ALLOW

        category = self.classify(url)

        if category == RouteCategory.SOCIAL_LOGIN_REDIRECT_TO_BROWSER:
            self._open_externally(url, self.generation)
            return CANCEL

        if category == RouteCategory.HOSTED_LOGIN_CALLBACK:
            return self.callbacks.handle_callback(url, self.generation)

        if category == RouteCategory.SOCIAL_OAUTH_PRE_LOGIN:
            return self._set_social_login_redirect_uri(url)

        return ALLOW

    def start(self, url: Optional[str]) -> None:
        """Navigation started loading"""
        if not url:
            logger.warning("Failed to get url from navigation start")
            self.state.set_loading(False)
            return

        self.current_url = url
        category = self.classify(url)
        self.state.set_external_link(category == RouteCategory.UNKNOWN)
        self.state.set_loading(True)
        logger.debug(
            f"start isLoading = {self.state.is_loading}, isExternalLink = {self.state.is_external_link}"
        )

    def response_policy(self, url: Optional[str], status: int, mime_type: Optional[str]) -> NavigationDecision:
        """Inspect response headers before the body loads

        Internal-route JSON errors are allowed to load so ``finish`` can read
        the error body; every response is allowed.
        """
        if url and status >= 400 and status != 500:
            category = self.classify(url)
            if is_json_error_response(category, status, mime_type):
                logger.debug(f"Recording pending status {status} for {url}")
                self.tracker.record(url, status)
        return ALLOW

    def finish(self, url: Optional[str]) -> None:
        """Navigation finished loading"""
        if not url:
            logger.warning("Failed to get url from navigation finish")
            self.state.set_loading(False)
            return

        category = self.classify(url)
        if category in (RouteCategory.LOGIN_ROUTES, RouteCategory.UNKNOWN):
            logger.info("Hiding loader screen")
            self.state.set_loading(False)
            return

        pending = self.tracker.consume()
        if pending is None:
            return

        self.state.set_loading(False)
        generation = self.generation
        self.stream.spawn(
            self.surface.read_document_text(),
            on_result=partial(self._show_json_error, url, pending.status, generation),
            on_error=partial(self._show_unreadable_json_error, url, pending.status, generation),
            name="hosted-login-error-body",
        )

    def fail(self, error: NavigationError) -> None:
        """Navigation failed at the transport level"""
        if error.code == NAVIGATION_INTERRUPTED_CODE:
            # Interrupted by our own cancel/load commands
            return

        url = error.failing_url or self.current_url or ""
        logger.error(f"Failed to load page: {error.message}, status: {error.code}, url: {url}")
        self.tracker.clear()
        self.state.set_loading(False)
        self._show_error_page(error.message, url, error.code)

    def close(self) -> None:
        """Tear down the flow; late async results are discarded"""
        self.closed = True
        self.tracker.clear()
        self.stream.cancel_all()

    # Helpers

    def _set_social_login_redirect_uri(self, url: str) -> NavigationDecision:
        if has_redirect_uri(url):
            logger.debug("redirectUri exists, forward navigation to browsing surface")
            return ALLOW

        redirected = append_redirect_uri(url, self.config.social_login_redirect_uri)
        logger.debug(f"Added redirectUri to social login url {redirected}")
        self.state.set_loading(True)
        self.surface.execute(LoadURL(redirected))
        return CANCEL

    def _open_externally(self, url: str, generation: int) -> None:
        self.stream.spawn(
            self.opener.open(url),
            on_result=partial(self._on_external_open, url, generation),
            on_error=partial(self._on_external_open_error, url, generation),
            name="hosted-login-open-external",
        )

    def _on_external_open(self, url: str, generation: int, opened: bool) -> None:
        if not self.is_current(generation):
            logger.warning(f"Discarding external open result from superseded navigation {generation}")
            return
        if opened:
            self.surface.execute(OpenExternally(url))
            return
        logger.warning(f"Failed to open {url} externally, restarting the flow")
        self.callbacks.restart_flow()

    def _on_external_open_error(self, url: str, generation: int, error: BaseException) -> None:
        logger.error(f"Opening {url} externally raised: {error}")
        self._on_external_open(url, generation, False)

    def _show_json_error(self, url: str, status: int, generation: int, document_text: Optional[str]) -> None:
        if not self.is_current(generation):
            logger.warning(f"Discarding error page for superseded navigation {generation}")
            return
        message = extract_error_message(document_text)
        logger.error(f"Failed to load page: {message}, status: {status}")
        self.state.set_loading(False)
        self._show_error_page(message, url, status)

    def _show_unreadable_json_error(self, url: str, status: int, generation: int, error: BaseException) -> None:
        logger.debug(f"Reading error body failed: {error}")
        self._show_json_error(url, status, generation, None)

    def _show_error_page(self, message: str, url: str, status: int) -> None:
        content = self.render_error(message, url, status)
        self.surface.execute(ShowErrorPage(html=content, message=message, url=url, status=status))
