"""
Hosted-login navigation policy

Classifies navigations of an embedded browsing surface during a hosted-login
(OAuth) flow and decides whether they proceed, are redirected, handed to the
system browser, or end in a code exchange.
"""
from .constants import (
    NAVIGATION_INTERRUPTED_CODE,
    REDIRECT_URI_PARAM,
    UNKNOWN_ERROR_MESSAGE,
)
from .models import (
    ALLOW,
    CANCEL,
    Allow,
    Cancel,
    LoadURL,
    NavigationCommand,
    NavigationDecision,
    NavigationError,
    OpenExternally,
    PendingResponse,
    PKCEPair,
    RouteCategory,
    ShowErrorPage,
    TokenResponse,
)
from .flow_config import FlowConfig, InvalidFlowConfig
from .url_classifier import classify
from .status_tracker import ResponseStatusTracker, is_json_error_response
from .error_page import render_error_page
from .state import AuthFlowState
from .event_stream import EventStream
from .capabilities import (
    AuthorizeUrlSource,
    BrowsingSurface,
    CodeExchanger,
    ExternalOpener,
    SystemBrowserOpener,
)
from .pkce import PKCEManager
from .authorization import AuthorizeUrlGenerator
from .token_exchange import HostedLoginTokenExchanger
from .callback_handler import HostedLoginCallbackHandler, extract_code
from .policy_engine import (
    NavigationPolicyEngine,
    append_redirect_uri,
    extract_error_message,
    has_redirect_uri,
)

__all__ = [
    # Constants
    "NAVIGATION_INTERRUPTED_CODE",
    "REDIRECT_URI_PARAM",
    "UNKNOWN_ERROR_MESSAGE",
    # Models
    "ALLOW",
    "CANCEL",
    "Allow",
    "Cancel",
    "LoadURL",
    "NavigationCommand",
    "NavigationDecision",
    "NavigationError",
    "OpenExternally",
    "PendingResponse",
    "PKCEPair",
    "RouteCategory",
    "ShowErrorPage",
    "TokenResponse",
    # Configuration
    "FlowConfig",
    "InvalidFlowConfig",
    # Classification and tracking
    "classify",
    "ResponseStatusTracker",
    "is_json_error_response",
    "render_error_page",
    # State and dispatch
    "AuthFlowState",
    "EventStream",
    # Capabilities
    "AuthorizeUrlSource",
    "BrowsingSurface",
    "CodeExchanger",
    "ExternalOpener",
    "SystemBrowserOpener",
    # OAuth collaborators
    "PKCEManager",
    "AuthorizeUrlGenerator",
    "HostedLoginTokenExchanger",
    # Engine
    "HostedLoginCallbackHandler",
    "extract_code",
    "NavigationPolicyEngine",
    "append_redirect_uri",
    "extract_error_message",
    "has_redirect_uri",
]
