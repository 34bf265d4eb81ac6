"""Response shaping: typed service results -> HTTP responses.

Every shaper first resolves the error arm through the shared error table.
A result with neither arm populated (or a value missing every field the
endpoint's priority checks look at) raises ``ResultContractViolation``.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from conformance_server.config.error_mapping import status_for_error_code
from conformance_server.models.results import (
    CheckPathResponse,
    CheckQueryResponse,
    CreateWidgetResponse,
    DeleteWidgetResponse,
    GetApiInfoResponse,
    GetWidgetBatchResponse,
    GetWidgetResponse,
    GetWidgetsResponse,
    MirrorFieldsResponse,
    ServiceResult,
)

logger = logging.getLogger(__name__)

CONTRACT_VIOLATION_MESSAGE = "Result must have an error or value."


class ResultContractViolation(RuntimeError):
    """Raised when an API service returns a result no endpoint rule can shape."""

    def __init__(self, operation: str, message: str = CONTRACT_VIOLATION_MESSAGE) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


def _json(content: Any, status_code: int = 200, headers: Optional[dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(jsonable_encoder(content), status_code=status_code, headers=headers)


class DecimalEchoResponse(JSONResponse):
    """JSON object response that writes top-level ``Decimal`` fields as exact number tokens.

    Other values go through ``jsonable_encoder`` as in ``_json``.
    """

    def render(self, content: Any) -> bytes:
        members = []
        for key, value in content.items():
            if isinstance(value, Decimal):
                if not value.is_finite():
                    raise ValueError(f"Out of range decimal value for JSON: {value}")
                token = str(value)
            else:
                token = json.dumps(
                    jsonable_encoder(value),
                    ensure_ascii=False,
                    allow_nan=False,
                    separators=(",", ":"),
                )
            members.append(f"{json.dumps(key, ensure_ascii=False)}:{token}")
        return ("{" + ",".join(members) + "}").encode("utf-8")


def _error_response(operation: str, result: ServiceResult) -> Optional[Response]:
    if result.error is None:
        return None
    status = status_for_error_code(result.error.code)
    logger.info(
        "dispatch.error_result",
        extra={"operation": operation, "code": result.error.code, "status": status},
    )
    return _json(result.error.to_wire(), status_code=status)


def _require_value(operation: str, result: ServiceResult) -> Any:
    if result.value is None:
        raise ResultContractViolation(operation)
    return result.value


def shape_get_api_info(result: ServiceResult[GetApiInfoResponse]) -> Response:
    error = _error_response("getApiInfo", result)
    if error is not None:
        return error
    value = _require_value("getApiInfo", result)
    return _json(value.to_wire())


def shape_get_widgets(result: ServiceResult[GetWidgetsResponse]) -> Response:
    error = _error_response("getWidgets", result)
    if error is not None:
        return error
    value = _require_value("getWidgets", result)
    return _json({"widgets": value.widgets})


def shape_create_widget(result: ServiceResult[CreateWidgetResponse]) -> Response:
    error = _error_response("createWidget", result)
    if error is not None:
        return error
    value = _require_value("createWidget", result)
    headers: dict[str, str] = {}
    if value.url is not None:
        headers["Location"] = value.url
    if value.e_tag is not None:
        headers["eTag"] = value.e_tag
    if value.widget is not None:
        return _json(value.widget, status_code=201, headers=headers)
    return Response(status_code=201, headers=headers)


def shape_get_widget(result: ServiceResult[GetWidgetResponse]) -> Response:
    error = _error_response("getWidget", result)
    if error is not None:
        return error
    value = _require_value("getWidget", result)
    headers: dict[str, str] = {}
    if value.e_tag is not None:
        headers["eTag"] = value.e_tag
    if value.widget is not None:
        return _json(value.widget, status_code=200, headers=headers)
    if value.not_modified:
        return Response(status_code=304, headers=headers)
    raise ResultContractViolation("getWidget")


def shape_delete_widget(result: ServiceResult[DeleteWidgetResponse]) -> Response:
    error = _error_response("deleteWidget", result)
    if error is not None:
        return error
    value = _require_value("deleteWidget", result)
    if value.not_found:
        return Response(status_code=404)
    if value.conflict:
        return Response(status_code=409)
    return Response(status_code=204)


def shape_get_widget_batch(result: ServiceResult[GetWidgetBatchResponse]) -> Response:
    error = _error_response("getWidgetBatch", result)
    if error is not None:
        return error
    value = _require_value("getWidgetBatch", result)
    if value.results is None:
        raise ResultContractViolation("getWidgetBatch")
    return _json([item.to_wire() for item in value.results])


def shape_mirror_fields(result: ServiceResult[MirrorFieldsResponse]) -> Response:
    error = _error_response("mirrorFields", result)
    if error is not None:
        return error
    value = _require_value("mirrorFields", result)
    return _json(value.to_wire())


def shape_check_query(result: ServiceResult[CheckQueryResponse]) -> Response:
    error = _error_response("checkQuery", result)
    if error is not None:
        return error
    value = _require_value("checkQuery", result)
    return DecimalEchoResponse(value.to_wire())


def shape_check_path(result: ServiceResult[CheckPathResponse]) -> Response:
    error = _error_response("checkPath", result)
    if error is not None:
        return error
    value = _require_value("checkPath", result)
    return DecimalEchoResponse(value.to_wire())


__all__ = [
    "CONTRACT_VIOLATION_MESSAGE",
    "DecimalEchoResponse",
    "ResultContractViolation",
    "shape_get_api_info",
    "shape_get_widgets",
    "shape_create_widget",
    "shape_get_widget",
    "shape_delete_widget",
    "shape_get_widget_batch",
    "shape_mirror_fields",
    "shape_check_query",
    "shape_check_path",
]
