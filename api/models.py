"""
Pydantic models for SnapMaster API responses.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict


class StatusResponse(BaseModel):
    """Result of a write call such as account creation"""
    model_config = ConfigDict(extra="allow")

    status: str = ""
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class ValidationResponse(BaseModel):
    """Result of an account name check"""
    valid: bool = False


class Profile(BaseModel):
    """User profile as returned by GET /profile"""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    email: Optional[str] = None
    account: Optional[str] = None


class DataResponse(BaseModel):
    """Envelope of the read calls: {"status": ..., "data": ...}"""
    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None
    message: Optional[str] = None
    data: Any = None

    def items(self) -> List[Dict[str, Any]]:
        """The entries of a list response, skipping anything that is not an object"""
        if not isinstance(self.data, list):
            return []
        return [entry for entry in self.data if isinstance(entry, dict)]
