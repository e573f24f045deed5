from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Hosted-login origin and OAuth client
BASE_URL = config.get("BASE_URL", "http://localhost:8080")
CLIENT_ID = config.get("CLIENT_ID", "")
# Bundle identifier used in the hosted-login callback path
APP_BUNDLE_ID = config.get("APP_BUNDLE_ID", "com.example.app")

# Comma separated provider hosts whose pages are social pre-login pages
SOCIAL_PRELOGIN_HOSTS = config.get("SOCIAL_PRELOGIN_HOSTS", "")
# Query flag marking URLs that must open in the system browser
EXTERNAL_BROWSER_MARKER = config.get("EXTERNAL_BROWSER_MARKER", "external=true")

# Code exchange timeout in seconds
EXCHANGE_TIMEOUT = config.get("EXCHANGE_TIMEOUT", 60.0)

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "info")
DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "hosted_login_debug.log")
