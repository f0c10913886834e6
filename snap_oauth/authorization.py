"""OAuth authorization URL construction"""

from typing import Tuple
from urllib.parse import urlencode, urlparse

import settings
from .errors import PreconditionError
from .models import PkceCodes

SCOPES = "openid profile email"


def build_authorize_url(
    auth_domain: str,
    client_id: str,
    redirect_uri: str,
    pkce: PkceCodes,
    audience: str = settings.API_AUDIENCE,
) -> str:
    """Construct the authorization URL for the identity provider

    Args:
        auth_domain: Identity provider host (e.g. snapmaster.auth0.com)
        client_id: OAuth client identifier
        redirect_uri: Loopback URL the provider redirects back to
        pkce: PKCE codes for this login attempt
        audience: API the access token is requested for

    Returns:
        Full authorization URL
    """
    params = {
        "audience": audience,
        "scope": SCOPES,
        "response_type": "code",
        "client_id": client_id,
        "code_challenge": pkce.code_challenge,
        "code_challenge_method": "S256",
        "redirect_uri": redirect_uri,
    }

    return f"https://{auth_domain}/authorize?{urlencode(params)}"


def token_endpoint(auth_domain: str) -> str:
    """Token endpoint of the identity provider"""
    return f"https://{auth_domain}/oauth/token"


def parse_redirect_uri(redirect_uri: str) -> Tuple[str, int]:
    """Extract the host and port the callback listener must bind

    Args:
        redirect_uri: Loopback URL such as http://localhost:8085

    Returns:
        Tuple of (host, port)

    Raises:
        PreconditionError: if the URL is malformed or has no usable port
    """
    try:
        parsed = urlparse(redirect_uri)
        port = parsed.port
    except ValueError as e:
        raise PreconditionError(f"bad redirect URL {redirect_uri!r}: {e}") from e

    if parsed.scheme != "http" or not parsed.hostname:
        raise PreconditionError(f"bad redirect URL {redirect_uri!r}: expected http://<host>:<port>")
    if not port:
        raise PreconditionError(f"bad redirect URL {redirect_uri!r}: no port to listen on")

    return parsed.hostname, port
