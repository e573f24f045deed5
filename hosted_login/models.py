"""Data models for the hosted-login navigation flow"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Union


class RouteCategory(str, Enum):
    """Route type assigned to a URL by the classifier"""
    SOCIAL_LOGIN_REDIRECT_TO_BROWSER = "SocialLoginRedirectToBrowser"
    HOSTED_LOGIN_CALLBACK = "HostedLoginCallback"
    SOCIAL_OAUTH_PRE_LOGIN = "SocialOauthPreLogin"
    LOGIN_ROUTES = "LoginRoutes"
    INTERNAL_ROUTES = "InternalRoutes"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Allow:
    """Let the browsing surface proceed with the navigation"""


@dataclass(frozen=True)
class Cancel:
    """Stop the navigation before anything is rendered"""


@dataclass(frozen=True)
class LoadURL:
    """Load a new URL in the browsing surface"""
    url: str


@dataclass(frozen=True)
class OpenExternally:
    """Hand a URL to the system browser"""
    url: str


@dataclass(frozen=True)
class ShowErrorPage:
    """Replace the current document with a rendered error page

    Attributes:
        html: Rendered document
        message: Error message shown on the page
        url: URL that failed
        status: HTTP status or platform error code
    """
    html: str
    message: str = ""
    url: str = ""
    status: int = 0


NavigationCommand = Union[Allow, Cancel, LoadURL, OpenExternally, ShowErrorPage]
NavigationDecision = Union[Allow, Cancel]

ALLOW = Allow()
CANCEL = Cancel()


@dataclass(frozen=True)
class PendingResponse:
    """HTTP status of an internal-route JSON error awaiting navigation finish"""
    url: str
    status: int


@dataclass(frozen=True)
class NavigationError:
    """Transport-level navigation failure reported by the browsing surface

    Attributes:
        code: Platform error code
        message: Human-readable description
        failing_url: URL that failed to load, when the platform reports it
    """
    code: int
    message: str
    failing_url: Optional[str] = None


@dataclass(frozen=True)
class TokenResponse:
    """Tokens returned by a successful code exchange"""
    access_token: str
    refresh_token: Optional[str]
    id_token: Optional[str]
    expires_in: int


class PKCEPair(NamedTuple):
    """PKCE code verifier and challenge pair"""
    verifier: str
    challenge: str
