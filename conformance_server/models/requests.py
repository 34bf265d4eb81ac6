"""Typed requests, one per endpoint.

Every field is optional: a value absent from the raw HTTP input stays
``None`` so the API service can tell "unset" apart from ``False``/``0``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from conformance_server.models.wire import WireModel

Widget = dict[str, Any]


class GetApiInfoRequest(WireModel):
    pass


class GetWidgetsRequest(WireModel):
    query: Optional[str] = None


class CreateWidgetRequest(WireModel):
    # Body taken verbatim; shape checks belong to the API service
    widget: Optional[Any] = None


class GetWidgetRequest(WireModel):
    id: Optional[int] = None
    if_not_e_tag: Optional[str] = None


class DeleteWidgetRequest(WireModel):
    id: Optional[int] = None
    if_e_tag: Optional[str] = None


class GetWidgetBatchRequest(WireModel):
    ids: Optional[Any] = None


class MirrorFieldsRequest(WireModel):
    field: Optional[Any] = None
    matrix: Optional[Any] = None


class CheckedPrimitives(WireModel):
    """One field per primitive kind exercised by the check endpoints."""

    string: Optional[str] = None
    boolean: Optional[bool] = None
    double: Optional[float] = None
    int32: Optional[int] = None
    int64: Optional[int] = None
    decimal: Optional[Decimal] = None
    enum: Optional[str] = None
    datetime: Optional[str] = None


class CheckQueryRequest(CheckedPrimitives):
    pass


class CheckPathRequest(CheckedPrimitives):
    pass


__all__ = [
    "Widget",
    "GetApiInfoRequest",
    "GetWidgetsRequest",
    "CreateWidgetRequest",
    "GetWidgetRequest",
    "DeleteWidgetRequest",
    "GetWidgetBatchRequest",
    "MirrorFieldsRequest",
    "CheckedPrimitives",
    "CheckQueryRequest",
    "CheckPathRequest",
]
