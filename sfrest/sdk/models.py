"""Models used by the SDK client."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

_LIMIT_INFO_RE = re.compile(r"api-usage=(\d+)/(\d+)")


class Credentials(BaseModel):
    """Connected-app and user credentials for the password grant."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    username: str
    password: str
    security_token: str = ""

    @property
    def grant_password(self) -> str:
        """Password as sent to the token endpoint (token appended)."""
        return f"{self.password}{self.security_token}"


def load_credentials(path: str | Path) -> Credentials:
    """Read credentials from a JSON file.

    Keys may use either ``client_id`` or ``client-id`` spelling.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return Credentials(**{k.replace("-", "_"): v for k, v in raw.items()})


class AuthContext(BaseModel):
    """Token bundle returned by the OAuth endpoint."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str
    instance_url: str
    issued_at: str | None = None
    signature: str | None = None
    id: str | None = None
    token_type: str | None = None


class ApiVersion(BaseModel):
    """One entry of the ``/services/data/`` version listing."""

    label: str
    url: str
    version: str


class QueryResult(BaseModel):
    """A single page of SOQL results."""

    model_config = ConfigDict(populate_by_name=True)

    total_size: int = Field(..., alias="totalSize")
    done: bool
    records: list[dict[str, Any]] = Field(default_factory=list)
    next_records_url: str | None = Field(None, alias="nextRecordsUrl")


class SObjectSummary(BaseModel):
    """Name and REST URL of an sobject from the global describe."""

    name: str
    url: str | None = None

    @classmethod
    def from_describe(cls, entry: Mapping[str, Any]) -> SObjectSummary:
        urls = entry.get("urls") or {}
        return cls(name=entry["name"], url=urls.get("sobject"))


@dataclass(frozen=True)
class LimitInfo:
    """API usage parsed from the ``Sforce-Limit-Info`` response header."""

    used: int
    available: int

    @property
    def remaining(self) -> int:
        return self.available - self.used

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> LimitInfo | None:
        """Parse ``api-usage=<used>/<available>``, returning *None* if absent."""
        raw = headers.get("sforce-limit-info")
        if raw is None:
            return None
        match = _LIMIT_INFO_RE.search(raw)
        if match is None:
            return None
        return cls(used=int(match.group(1)), available=int(match.group(2)))
