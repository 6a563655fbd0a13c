from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResponseSpec(BaseModel):
    """The response the mock server should answer an expected request with."""

    model_config = ConfigDict(frozen=True)

    status: int = 0
    headers: Optional[Dict[str, str]] = None
    body: Any = None

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.headers:
            out["headers"] = dict(self.headers)
        if self.body is not None:
            out["body"] = self.body
        out["status"] = self.status
        return out


class ExpectedRequest(BaseModel):
    """
    A request the mock server should expect.

    Entries coming back from the server may be sparse, so method/path fall
    back to "" and response to None instead of failing validation.
    """

    model_config = ConfigDict(frozen=True)

    method: str = ""
    path: str = ""
    headers: Optional[Dict[str, str]] = None
    body: Any = None
    query: Optional[Dict[str, str]] = None
    times: int = 0
    response: Optional[ResponseSpec] = None

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.headers:
            out["headers"] = dict(self.headers)
        if self.body is not None:
            out["body"] = self.body
        out["method"] = self.method
        out["path"] = self.path
        if self.times:
            out["times"] = self.times
        if self.query:
            out["query"] = dict(self.query)
        out["response"] = self.response.to_wire() if self.response is not None else None
        return out


class ResultSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    expected: List[ExpectedRequest] = Field(default_factory=list)
    unexpected: List[ExpectedRequest] = Field(default_factory=list)

    @field_validator("expected", "unexpected", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def is_clean(self) -> bool:
        return not self.expected and not self.unexpected

    def to_wire(self) -> Dict[str, Any]:
        return {
            "expected": [r.to_wire() for r in self.expected],
            "unexpected": [r.to_wire() for r in self.unexpected],
        }
