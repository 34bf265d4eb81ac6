"""Request binders: raw HTTP input -> typed request objects.

One binder per endpoint. Binders never reject a request: malformed input
degrades to an unset field and the API service decides what that means.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from fastapi import Request

from conformance_server.logic.coercion import coerce, coerce_int32, coerce_string
from conformance_server.models.requests import (
    CheckPathRequest,
    CheckQueryRequest,
    CreateWidgetRequest,
    DeleteWidgetRequest,
    GetApiInfoRequest,
    GetWidgetBatchRequest,
    GetWidgetRequest,
    GetWidgetsRequest,
    MirrorFieldsRequest,
)

logger = logging.getLogger(__name__)

# Declared order of the typed check fields; also the checkPath segment order
CHECK_FIELDS: tuple[str, ...] = (
    "string",
    "boolean",
    "double",
    "int32",
    "int64",
    "decimal",
    "enum",
    "datetime",
)

_MISSING = object()


def _query(request: Request, name: str) -> Optional[str]:
    value = request.query_params.get(name)
    return value if value else None


def _path(request: Request, name: str) -> Optional[str]:
    return request.path_params.get(name)


def _header(request: Request, name: str) -> Optional[str]:
    return request.headers.get(name)


async def _json_body(request: Request) -> Any:
    """Return the parsed JSON body, or ``_MISSING`` when empty or malformed."""
    raw = await request.body()
    if not raw:
        return _MISSING
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.info("binding.body_unparseable", extra={"path": request.url.path, "size_bytes": len(raw)})
        return _MISSING


def _typed_fields(source: dict[str, Optional[str]]) -> dict[str, Any]:
    bound: dict[str, Any] = {}
    for name in CHECK_FIELDS:
        value = coerce(name, source.get(name))
        if value is not None:
            bound[name] = value
    return bound


async def bind_get_api_info(request: Request) -> GetApiInfoRequest:
    return GetApiInfoRequest()


async def bind_get_widgets(request: Request) -> GetWidgetsRequest:
    return GetWidgetsRequest(query=coerce_string(_query(request, "q")))


async def bind_create_widget(request: Request) -> CreateWidgetRequest:
    body = await _json_body(request)
    if body is _MISSING:
        return CreateWidgetRequest()
    return CreateWidgetRequest(widget=body)


async def bind_get_widget(request: Request) -> GetWidgetRequest:
    return GetWidgetRequest(
        id=coerce_int32(_path(request, "id")),
        if_not_e_tag=_header(request, "If-None-Match"),
    )


async def bind_delete_widget(request: Request) -> DeleteWidgetRequest:
    return DeleteWidgetRequest(
        id=coerce_int32(_path(request, "id")),
        if_e_tag=_header(request, "If-Match"),
    )


async def bind_get_widget_batch(request: Request) -> GetWidgetBatchRequest:
    body = await _json_body(request)
    if body is _MISSING:
        return GetWidgetBatchRequest()
    return GetWidgetBatchRequest(ids=body)


async def bind_mirror_fields(request: Request) -> MirrorFieldsRequest:
    body = await _json_body(request)
    if not isinstance(body, dict):
        return MirrorFieldsRequest()
    return MirrorFieldsRequest(field=body.get("field"), matrix=body.get("matrix"))


async def bind_check_query(request: Request) -> CheckQueryRequest:
    raw = {name: _query(request, name) for name in CHECK_FIELDS}
    return CheckQueryRequest(**_typed_fields(raw))


async def bind_check_path(request: Request) -> CheckPathRequest:
    raw = {name: _path(request, name) for name in CHECK_FIELDS}
    return CheckPathRequest(**_typed_fields(raw))


__all__ = [
    "CHECK_FIELDS",
    "bind_get_api_info",
    "bind_get_widgets",
    "bind_create_widget",
    "bind_get_widget",
    "bind_delete_widget",
    "bind_get_widget_batch",
    "bind_mirror_fields",
    "bind_check_query",
    "bind_check_path",
]
