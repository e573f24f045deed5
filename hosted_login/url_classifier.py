"""URL classification for hosted-login navigation"""

import logging
from urllib.parse import urlparse

from .flow_config import FlowConfig
from .models import RouteCategory

logger = logging.getLogger(__name__)


def _has_query_flag(query: str, marker: str) -> bool:
    if not query or not marker:
        return False
    return marker in query.split("&")


def classify(url: str, config: FlowConfig) -> RouteCategory:
    """Classify a URL against the hosted-login route taxonomy

    Args:
        url: Absolute URL of the navigation target
        config: Flow configuration with the known route patterns

    Returns:
        The route category; Unknown for anything outside the hosted-login flow
    """
    if not url:
        return RouteCategory.UNKNOWN

    try:
        parsed = urlparse(url)
        host = (parsed.hostname or "").lower()
    except ValueError:
        logger.debug(f"Unparseable URL treated as unknown: {url!r}")
        return RouteCategory.UNKNOWN

    if config.matches_callback(parsed.scheme, parsed.netloc, parsed.path):
        return RouteCategory.HOSTED_LOGIN_CALLBACK

    if _has_query_flag(parsed.query, config.external_browser_marker):
        return RouteCategory.SOCIAL_LOGIN_REDIRECT_TO_BROWSER

    if host and host in config.social_prelogin_hosts:
        return RouteCategory.SOCIAL_OAUTH_PRE_LOGIN

    if not host or host != config.base_host:
        return RouteCategory.UNKNOWN

    path = parsed.path or "/"
    if config.matches_social_prelogin_path(path):
        return RouteCategory.SOCIAL_OAUTH_PRE_LOGIN

    # Internal prefixes take precedence over login prefixes they overlap
    if any(path.startswith(prefix) for prefix in config.internal_route_prefixes):
        return RouteCategory.INTERNAL_ROUTES

    if any(path.startswith(prefix) for prefix in config.login_route_prefixes):
        return RouteCategory.LOGIN_ROUTES

    # Everything else served by the hosted-login host is a first-party route
    return RouteCategory.INTERNAL_ROUTES
