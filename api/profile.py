"""Account and profile calls used by the first-login flow"""

import logging
from typing import Any, Dict
from urllib.parse import quote, urlencode

from .client import SnapAPIClient, parse_response
from .models import Profile, StatusResponse, ValidationResponse

logger = logging.getLogger(__name__)


class ProfileAPI:
    """Typed wrappers for the /profile and /validateaccount endpoints"""

    def __init__(self, client: SnapAPIClient):
        self.client = client

    def get_profile(self) -> Profile:
        return parse_response(Profile, self.client.get("/profile"))

    def get_account(self) -> str:
        """Account name of the logged in user, or "" before first setup"""
        return self.get_profile().account or ""

    def validate_account(self, account: str) -> bool:
        """Check that an account name is well formed and not taken"""
        body = self.client.get(f"/validateaccount?{urlencode({'account': account})}")
        return parse_response(ValidationResponse, body).valid

    def create_account(self, account: str) -> str:
        """Associate the account name with the user; returns the status string"""
        body = self.client.post(f"/validateaccount/{quote(account, safe='')}")
        result = parse_response(StatusResponse, body)
        if not result.ok:
            logger.error(f"Account creation for '{account}' returned status {result.status!r}: {result.message}")
        return result.status

    def store_profile(self, profile: Dict[str, Any]) -> str:
        """Store the user's profile; returns the status string"""
        body = self.client.post("/profile", Profile(**profile).model_dump_json(exclude_none=True).encode())
        result = parse_response(StatusResponse, body)
        if not result.ok:
            logger.error(f"Storing profile returned status {result.status!r}: {result.message}")
        return result.status
