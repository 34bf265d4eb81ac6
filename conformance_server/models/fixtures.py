"""Pydantic models for conformance fixture files."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ConformanceTest(BaseModel):
    """A single literal exchange: operation, typed request and typed result."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(validation_alias=AliasChoices("test", "name"))
    method: str
    request: dict[str, Any] = Field(default_factory=dict)
    response: dict[str, Any] = Field(default_factory=dict)
    http_request: Optional[dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("httpRequest", "http_request")
    )
    http_response: Optional[dict[str, Any]] = Field(
        default=None, validation_alias=AliasChoices("httpResponse", "http_response")
    )


class ConformanceTestFile(BaseModel):
    tests: list[ConformanceTest]


__all__ = ["ConformanceTest", "ConformanceTestFile"]
