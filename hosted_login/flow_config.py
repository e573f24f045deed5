"""Flow configuration for the hosted-login navigation policy"""

import re
from dataclasses import dataclass, field
from typing import Tuple
from urllib.parse import urlparse

from .constants import (
    CALLBACK_PATH_TEMPLATE,
    EXTERNAL_BROWSER_MARKER,
    INTERNAL_ROUTE_PREFIXES,
    LOGIN_ROUTE_PREFIXES,
    SOCIAL_LOGIN_SUCCESS_PATH,
    SOCIAL_PRELOGIN_PATTERNS,
)


class InvalidFlowConfig(ValueError):
    """Raised when a flow configuration cannot describe a hosted-login origin"""


@dataclass(frozen=True)
class FlowConfig:
    """Route configuration for one hosted-login flow

    Attributes:
        base_url: Hosted-login origin, e.g. https://auth.example.com
        client_id: OAuth client identifier
        callback_uri: Redirect URI carrying the authorization code
        social_login_redirect_uri: Value appended as redirectUri to social pre-login URLs
        login_route_prefixes: Paths on the base host that show the login UI
        internal_route_prefixes: First-party API paths on the base host
        social_prelogin_patterns: Regexes matched against base host paths
        social_prelogin_hosts: Provider hosts whose pages are social pre-login pages
        external_browser_marker: Query flag that forces the system browser
    """
    base_url: str
    client_id: str = ""
    callback_uri: str = ""
    social_login_redirect_uri: str = ""
    login_route_prefixes: Tuple[str, ...] = LOGIN_ROUTE_PREFIXES
    internal_route_prefixes: Tuple[str, ...] = INTERNAL_ROUTE_PREFIXES
    social_prelogin_patterns: Tuple[str, ...] = SOCIAL_PRELOGIN_PATTERNS
    social_prelogin_hosts: Tuple[str, ...] = ()
    external_browser_marker: str = EXTERNAL_BROWSER_MARKER
    _compiled: Tuple[re.Pattern, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        parsed = urlparse(self.base_url or "")
        if not parsed.scheme or not parsed.netloc:
            raise InvalidFlowConfig(f"base_url must be an absolute URL, got {self.base_url!r}")

        # Frozen dataclass: derived fields go through object.__setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if not self.callback_uri:
            object.__setattr__(
                self,
                "callback_uri",
                self.base_url + CALLBACK_PATH_TEMPLATE.format(bundle_id="app"),
            )
        if not self.social_login_redirect_uri:
            object.__setattr__(
                self, "social_login_redirect_uri", self.base_url + SOCIAL_LOGIN_SUCCESS_PATH
            )
        object.__setattr__(
            self, "_compiled", tuple(re.compile(p) for p in self.social_prelogin_patterns)
        )

    @property
    def base_host(self) -> str:
        return (urlparse(self.base_url).hostname or "").lower()

    def matches_social_prelogin_path(self, path: str) -> bool:
        return any(pattern.match(path) for pattern in self._compiled)

    def matches_callback(self, scheme: str, netloc: str, path: str) -> bool:
        """Check a parsed URL against the callback URI

        Scheme and host must be equal and the path must be the callback path
        itself or a sub-path of it.
        """
        callback = urlparse(self.callback_uri)
        if scheme.lower() != callback.scheme.lower() or netloc.lower() != callback.netloc.lower():
            return False
        callback_path = callback.path.rstrip("/")
        return path.rstrip("/") == callback_path or path.startswith(callback_path + "/")

    @classmethod
    def from_settings(cls) -> "FlowConfig":
        """Build a flow configuration from settings.py values"""
        import settings

        hosts = tuple(
            host.strip().lower()
            for host in settings.SOCIAL_PRELOGIN_HOSTS.split(",")
            if host.strip()
        )
        base_url = settings.BASE_URL.rstrip("/")
        return cls(
            base_url=base_url,
            client_id=settings.CLIENT_ID,
            callback_uri=base_url + CALLBACK_PATH_TEMPLATE.format(bundle_id=settings.APP_BUNDLE_ID),
            social_prelogin_hosts=hosts,
            external_browser_marker=settings.EXTERNAL_BROWSER_MARKER,
        )
