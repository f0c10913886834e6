"""Data models for the snap login flow"""

from dataclasses import dataclass
from typing import Dict, Optional

from config.session import SnapConfig


@dataclass
class PkceCodes:
    """PKCE (Proof Key for Code Exchange) codes for one login attempt

    Attributes:
        code_verifier: Random secret, sent only in the token exchange
        code_challenge: base64url(SHA-256(code_verifier)), sent in the auth request
    """
    code_verifier: str
    code_challenge: str


@dataclass
class TokenData:
    """Tokens returned by the identity provider's token endpoint

    Attributes:
        id_token: JWT carrying the user's identity claims
        access_token: Bearer token for the SnapMaster API
        refresh_token: Present for some providers, unused by the CLI
    """
    id_token: str
    access_token: str
    refresh_token: Optional[str] = None


@dataclass
class Identity:
    """User identity decoded from the ID token"""
    name: str
    email: str


@dataclass
class UserProfile:
    """Profile record stored on the server after first login"""
    name: str
    email: str
    account: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "email": self.email, "account": self.account}


@dataclass
class LoginResult:
    """Outcome of a completed login"""
    identity: Identity
    config: SnapConfig
    account: str = ""
    provisioned: bool = False
