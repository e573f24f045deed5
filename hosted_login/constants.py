"""
Hosted-login route constants
"""

# Path templates, relative to the hosted-login base URL
CALLBACK_PATH_TEMPLATE = "/oauth/account/redirect/ios/{bundle_id}"
SOCIAL_LOGIN_SUCCESS_PATH = "/oauth/account/social/success"
AUTHORIZE_PATH = "/oauth/authorize"
TOKEN_PATH = "/oauth/token"

# Route prefixes on the hosted-login host
LOGIN_ROUTE_PREFIXES = ("/oauth/account/",)
INTERNAL_ROUTE_PREFIXES = ("/frontegg/", "/identity/")

# Social provider pre-login endpoints served by the hosted-login host
SOCIAL_PRELOGIN_PATTERNS = (
    r"^/frontegg/identity/resources/auth/[^/]+/user/sso/default/[^/]+/prelogin$",
    r"^/identity/resources/auth/[^/]+/user/sso/default/[^/]+/prelogin$",
)

# Query flag marking a URL that must leave the in-app browsing surface
EXTERNAL_BROWSER_MARKER = "external=true"

# Query parameter carrying the social login redirect target
REDIRECT_URI_PARAM = "redirectUri"

# OAuth parameters
SCOPE = "openid email profile"
CODE_PARAM = "code"

# Platform error code reported when a navigation is interrupted by our own
# cancel/load commands
NAVIGATION_INTERRUPTED_CODE = 102

JSON_MIME_TYPE = "application/json"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
