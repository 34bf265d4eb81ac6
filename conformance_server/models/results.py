"""Typed results returned by the API service.

A ``ServiceResult`` is a value-or-error union: exactly one of ``error`` and
``value`` is expected to be populated. Response shaping treats a result with
neither arm as a contract violation.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from conformance_server.models.requests import CheckedPrimitives, Widget
from conformance_server.models.wire import WireModel

T = TypeVar("T")


class ServiceError(WireModel):
    code: Optional[str] = None
    message: Optional[str] = None


class ServiceResult(WireModel, Generic[T]):
    error: Optional[ServiceError] = None
    value: Optional[T] = None

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, code: str, message: Optional[str] = None) -> "ServiceResult[T]":
        return cls(error=ServiceError(code=code, message=message))


class GetApiInfoResponse(WireModel):
    service: Optional[str] = None
    version: Optional[str] = None


class GetWidgetsResponse(WireModel):
    widgets: Optional[list[Widget]] = None


class CreateWidgetResponse(WireModel):
    widget: Optional[Widget] = None
    url: Optional[str] = None
    e_tag: Optional[str] = None


class GetWidgetResponse(WireModel):
    widget: Optional[Widget] = None
    e_tag: Optional[str] = None
    not_modified: Optional[bool] = None


class DeleteWidgetResponse(WireModel):
    not_found: Optional[bool] = None
    conflict: Optional[bool] = None


class GetWidgetBatchResponse(WireModel):
    # Positionally aligned with the requested ids
    results: Optional[list[ServiceResult[Widget]]] = None


class MirrorFieldsResponse(WireModel):
    field: Optional[Any] = None
    matrix: Optional[Any] = None


class CheckQueryResponse(CheckedPrimitives):
    pass


class CheckPathResponse(CheckedPrimitives):
    pass


__all__ = [
    "ServiceError",
    "ServiceResult",
    "GetApiInfoResponse",
    "GetWidgetsResponse",
    "CreateWidgetResponse",
    "GetWidgetResponse",
    "DeleteWidgetResponse",
    "GetWidgetBatchResponse",
    "MirrorFieldsResponse",
    "CheckQueryResponse",
    "CheckPathResponse",
]
