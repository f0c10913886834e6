"""PKCE (Proof Key for Code Exchange) code generation"""

import base64
import hashlib
import secrets

from .errors import PreconditionError
from .models import PkceCodes


def create_code_challenge(code_verifier: str) -> str:
    """Derive the S256 code challenge for a verifier

    Args:
        code_verifier: PKCE code verifier

    Returns:
        base64url encoded SHA-256 digest of the verifier, without padding
    """
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def generate_pkce() -> PkceCodes:
    """Generate a fresh PKCE code verifier and challenge

    RFC 7636: the verifier is 43-128 characters of base64url text. 32 random
    bytes give a 43 character verifier. The codes live only in memory for a
    single login attempt.

    Returns:
        PkceCodes for this attempt

    Raises:
        PreconditionError: if the OS has no secure random source
    """
    try:
        code_verifier = secrets.token_urlsafe(32)
    except (NotImplementedError, OSError) as e:
        raise PreconditionError(f"no secure random source available: {e}") from e

    return PkceCodes(
        code_verifier=code_verifier,
        code_challenge=create_code_challenge(code_verifier),
    )
