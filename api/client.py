"""SnapMaster API HTTP client"""

import logging
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from config.session import SnapConfig
from settings import CONNECT_TIMEOUT, REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class APIError(Exception):
    """The SnapMaster API could not be called"""


class LoginRequired(APIError):
    """No access token in the config"""


class TokenExpired(APIError):
    """The API rejected the access token"""


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_response(model: Type[ModelT], body: bytes) -> ModelT:
    """Validate a JSON response body against a model"""
    try:
        return model.model_validate_json(body or b"{}")
    except ValidationError as e:
        raise APIError(f"unexpected response from the API: {e}") from e


class SnapAPIClient:
    """Authenticated GET/POST calls against the SnapMaster API

    Args:
        config: Config carrying the API URL and access token
        transport: Optional httpx transport (used by tests)
    """

    def __init__(self, config: SnapConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self.transport = transport

    def get(self, path: str) -> bytes:
        """Call the API at the relative path and return the body"""
        return self._call("GET", path)

    def post(self, path: str, payload: bytes = b"") -> bytes:
        """POST the payload to the relative path and return the body"""
        return self._call("POST", path, payload)

    def _call(self, method: str, path: str, payload: Optional[bytes] = None) -> bytes:
        if not self.config.access_token:
            raise LoginRequired("login required before executing this command")
        if not self.config.api_url:
            raise APIError("API URL required but not found")

        url = self.config.api_url.rstrip("/") + path
        headers = {
            "content-type": "application/json",
            "authorization": f"Bearer {self.config.access_token}",
        }

        logger.debug(f"{method} {url}")

        try:
            with httpx.Client(
                transport=self.transport,
                timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT),
            ) as client:
                response = client.request(method, url, content=payload, headers=headers)
        except httpx.RequestError as e:
            raise APIError(f"could not execute HTTP request with URL {url}: {e}") from e

        if response.status_code == 401:
            raise TokenExpired("token expired; please log in again")

        contents = response.content

        # An HTML page instead of JSON means the request was bounced to a login page
        if contents[:15].lower() == b"<!doctype html>":
            raise TokenExpired("token expired; please log in again")

        logger.debug(f"{method} {url} -> {response.status_code} ({len(contents)} bytes)")
        return contents
