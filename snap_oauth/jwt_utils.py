"""ID token parsing

Claims are decoded without verifying the token signature. The ID token
comes straight from the provider's token endpoint over TLS in the code
exchange, never from the redirect URL, and the CLI does not fetch the
provider's signing keys.
"""
import base64
import json
import logging
from typing import Any, Dict, Optional

from .errors import ClaimDecodeError
from .models import Identity

logger = logging.getLogger(__name__)


def parse_jwt_claims(token: str) -> Optional[Dict[str, Any]]:
    """Parse a JWT and return the claims from its payload

    Args:
        token: JWT string (header.payload.signature)

    Returns:
        Dictionary of claims, or None if the token cannot be parsed
    """
    if not token or token.count(".") != 2:
        logger.debug("JWT does not have three segments")
        return None

    try:
        _, payload, _ = token.split(".")
        # JWT uses base64url without padding
        padded = payload + "=" * (-len(payload) % 4)
        data = base64.urlsafe_b64decode(padded.encode())
        claims = json.loads(data.decode())
    except (ValueError, UnicodeDecodeError) as e:
        logger.debug(f"Error decoding JWT payload: {e}")
        return None

    if not isinstance(claims, dict):
        return None
    return claims


def extract_identity(id_token: str) -> Identity:
    """Extract the user's name and email from an ID token

    Args:
        id_token: OpenID Connect ID token

    Returns:
        Identity with name and email

    Raises:
        ClaimDecodeError: if the token is unparsable or a claim is missing
    """
    claims = parse_jwt_claims(id_token)
    if claims is None:
        raise ClaimDecodeError("could not parse JWT")

    missing = [c for c in ("name", "email") if not isinstance(claims.get(c), str)]
    if missing:
        raise ClaimDecodeError(f"ID token is missing claims: {', '.join(missing)}")

    return Identity(name=claims["name"], email=claims["email"])
