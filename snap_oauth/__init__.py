"""SnapMaster OAuth login module

Authorization Code + PKCE login against the SnapMaster identity provider,
plus first-login account provisioning.
"""

from .errors import (
    AuthError,
    PreconditionError,
    MissingAuthorizationCode,
    TokenExchangeFailed,
    ClaimDecodeError,
    PersistenceFailed,
    LoginTimeout,
    ProvisioningRejected,
    ProvisioningFailed,
)
from .models import PkceCodes, TokenData, Identity, UserProfile, LoginResult
from .pkce import generate_pkce, create_code_challenge
from .authorization import build_authorize_url, parse_redirect_uri, token_endpoint
from .token_exchange import exchange_code_for_tokens
from .jwt_utils import parse_jwt_claims, extract_identity
from .callback_server import OAuthCallbackServer
from .provisioning import AccountProvisioner
from .login_flow import LoginFlow, logout

__all__ = [
    # Errors
    "AuthError",
    "PreconditionError",
    "MissingAuthorizationCode",
    "TokenExchangeFailed",
    "ClaimDecodeError",
    "PersistenceFailed",
    "LoginTimeout",
    "ProvisioningRejected",
    "ProvisioningFailed",
    # Models
    "PkceCodes",
    "TokenData",
    "Identity",
    "UserProfile",
    "LoginResult",
    # PKCE and authorization
    "generate_pkce",
    "create_code_challenge",
    "build_authorize_url",
    "parse_redirect_uri",
    "token_endpoint",
    # Token exchange and claims
    "exchange_code_for_tokens",
    "parse_jwt_claims",
    "extract_identity",
    # Callback server
    "OAuthCallbackServer",
    # Flows
    "AccountProvisioner",
    "LoginFlow",
    "logout",
]
