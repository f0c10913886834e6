"""Local configuration and session credential"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict

import settings


@dataclass
class SnapConfig:
    """Settings and session credential persisted in config.json

    Field metadata carries the key used in config.json. An empty
    access_token means no user is logged in.
    """
    access_token: str = field(default="", metadata={"key": "AccessToken"})
    name: str = field(default="", metadata={"key": "Name"})
    email: str = field(default="", metadata={"key": "Email"})
    api_url: str = field(default=settings.DEFAULT_API_URL, metadata={"key": "APIURL"})
    client_id: str = field(default=settings.DEFAULT_CLIENT_ID, metadata={"key": "ClientID"})
    auth_domain: str = field(default=settings.DEFAULT_AUTH_DOMAIN, metadata={"key": "AuthDomain"})
    redirect_url: str = field(default=settings.DEFAULT_REDIRECT_URL, metadata={"key": "RedirectURL"})

    @property
    def is_logged_in(self) -> bool:
        return bool(self.access_token)

    def to_dict(self) -> Dict[str, str]:
        """Convert to the on-disk key/value layout"""
        return {f.metadata["key"]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnapConfig":
        """Load from the on-disk layout, ignoring unknown keys

        Keys are matched case-insensitively so that files written with
        lowercased keys still load.
        """
        lowered = {str(k).lower(): v for k, v in data.items()}
        values = {}
        for f in fields(cls):
            value = lowered.get(f.metadata["key"].lower())
            if value is not None:
                values[f.name] = str(value)
        return cls(**values)

    def set(self, key: str, value: str) -> None:
        """Set a field by its config.json key (e.g. "APIURL")"""
        for f in fields(self):
            if f.metadata["key"].lower() == key.lower():
                setattr(self, f.name, value)
                return
        raise KeyError(key)

    def with_session(self, access_token: str, name: str, email: str) -> "SnapConfig":
        """Return a copy carrying a fresh session credential"""
        data = self.to_dict()
        data.update({"AccessToken": access_token, "Name": name, "Email": email})
        return SnapConfig.from_dict(data)

    def without_session(self) -> "SnapConfig":
        """Return a copy with the session credential blanked"""
        return self.with_session("", "", "")
