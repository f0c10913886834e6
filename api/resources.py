"""Snaps, active snaps, tools, connections and logs"""

import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from .client import SnapAPIClient, parse_response
from .models import DataResponse

logger = logging.getLogger(__name__)

# Actions accepted by POST /activesnaps
ACTIVE_SNAP_ACTIONS = ("pause", "resume", "deactivate")


def _segment(value: str) -> str:
    return quote(value, safe="")


class ResourceAPI:
    """Read calls and active snap actions against the SnapMaster API

    Every call returns the parsed response envelope; rendering is left to
    the caller.
    """

    def __init__(self, client: SnapAPIClient):
        self.client = client

    def _get(self, path: str) -> DataResponse:
        return parse_response(DataResponse, self.client.get(path))

    def gallery(self) -> DataResponse:
        return self._get("/gallery")

    def snaps(self) -> DataResponse:
        return self._get("/snaps")

    def snap(self, snap_id: str) -> DataResponse:
        return self._get(f"/snaps/{_segment(snap_id)}")

    def active_snaps(self) -> DataResponse:
        return self._get("/activesnaps")

    def active_snap(self, active_snap_id: str) -> DataResponse:
        return self._get(f"/activesnaps/{_segment(active_snap_id)}")

    def active_snap_logs(self, active_snap_id: str) -> DataResponse:
        return self._get(f"/logs/{_segment(active_snap_id)}")

    def active_snap_action(self, active_snap_id: str, action: str) -> DataResponse:
        """Pause, resume or deactivate an active snap"""
        if action not in ACTIVE_SNAP_ACTIONS:
            raise ValueError(f"unknown active snap action: {action}")

        payload = json.dumps({"action": action, "snapId": active_snap_id}).encode()
        logger.info(f"Requesting {action} of active snap {active_snap_id}")
        return parse_response(DataResponse, self.client.post("/activesnaps", payload))

    def tools(self) -> DataResponse:
        return self._get("/connections")

    def tool(self, provider: str) -> Optional[Dict[str, Any]]:
        """Description of one tool, or None if the library has no such provider"""
        return _find(self.tools(), "provider", provider)

    def connections(self) -> DataResponse:
        return self._get("/connections")

    def connection(self, name: str) -> DataResponse:
        """Credential sets stored for a connected tool"""
        return self._get(f"/entities/{_segment(name)}")

    def logs(self) -> DataResponse:
        return self._get("/logs")

    def log_details(self, log_id: str) -> Optional[Dict[str, Any]]:
        """Log entry with the given ID (its timestamp), or None"""
        return _find(self.logs(), "timestamp", log_id)


def _find(response: DataResponse, key: str, value: str) -> Optional[Dict[str, Any]]:
    for entry in response.items():
        if str(entry.get(key)) == value:
            return entry
    return None

