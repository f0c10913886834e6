from pathlib import Path
from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

VERSION = "0.4.0"
GIT_HASH = config.get("SNAP_GIT_HASH", "dev")

# Logging
LOG_LEVEL = config.get("SNAP_LOG_LEVEL", "warning")
DEBUG_LOG_FILE = config.get("SNAP_DEBUG_LOG_FILE", "snap_debug.log")

# Local config store ($HOME/.config/snap/config.json unless overridden)
CONFIG_FILE = config.get("SNAP_CONFIG_FILE", str(Path.home() / ".config" / "snap" / "config.json"))

# Defaults for the public SnapMaster service
DEFAULT_CLIENT_ID = "O4e0z2Ky5DSvjzw3N5YLgtrz1GGltkOb"
DEFAULT_API_URL = "https://www.snapmaster.io"
DEFAULT_AUTH_DOMAIN = "snapmaster.auth0.com"
DEFAULT_REDIRECT_URL = "http://localhost:8085"

# Audience the access token is minted for
API_AUDIENCE = config.get("SNAP_API_AUDIENCE", "https://api.snapmaster.io")

# Environment presets for `snap config set dev|prod`
ENVIRONMENTS = {
    "dev": {
        "ClientID": "f9BSuAhmF8dmUtJWZyjAVJbGJWQMKsMW",
        "APIURL": "https://dev.snapmaster.io",
        "AuthDomain": "snapmaster-dev.auth0.com",
    },
    "prod": {
        "ClientID": DEFAULT_CLIENT_ID,
        "APIURL": DEFAULT_API_URL,
        "AuthDomain": DEFAULT_AUTH_DOMAIN,
    },
}

# Seconds to wait for the browser to come back to the callback listener.
# 0 waits until the callback arrives or the user hits Ctrl-C.
LOGIN_TIMEOUT = config.get("SNAP_LOGIN_TIMEOUT", 0.0)

# Timeouts for outbound HTTP calls
CONNECT_TIMEOUT = config.get("SNAP_CONNECT_TIMEOUT", 10.0)
REQUEST_TIMEOUT = config.get("SNAP_REQUEST_TIMEOUT", 60.0)
