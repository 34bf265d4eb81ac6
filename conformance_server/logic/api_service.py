"""Capability interface consumed by the dispatcher.

Implementations expose one coroutine per endpoint; each takes the typed
request and returns a ``ServiceResult`` whose value type is fixed per
operation. ``OPERATIONS`` maps the Python method names to the wire names
used by conformance fixtures.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

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

# python method name -> (fixture method name, value type)
OPERATIONS: dict[str, tuple[str, type]] = {
    "get_api_info": ("getApiInfo", GetApiInfoResponse),
    "get_widgets": ("getWidgets", GetWidgetsResponse),
    "create_widget": ("createWidget", CreateWidgetResponse),
    "get_widget": ("getWidget", GetWidgetResponse),
    "delete_widget": ("deleteWidget", DeleteWidgetResponse),
    "get_widget_batch": ("getWidgetBatch", GetWidgetBatchResponse),
    "mirror_fields": ("mirrorFields", MirrorFieldsResponse),
    "check_query": ("checkQuery", CheckQueryResponse),
    "check_path": ("checkPath", CheckPathResponse),
}


@runtime_checkable
class ConformanceApi(Protocol):
    async def get_api_info(self, request: GetApiInfoRequest) -> ServiceResult[GetApiInfoResponse]: ...

    async def get_widgets(self, request: GetWidgetsRequest) -> ServiceResult[GetWidgetsResponse]: ...

    async def create_widget(self, request: CreateWidgetRequest) -> ServiceResult[CreateWidgetResponse]: ...

    async def get_widget(self, request: GetWidgetRequest) -> ServiceResult[GetWidgetResponse]: ...

    async def delete_widget(self, request: DeleteWidgetRequest) -> ServiceResult[DeleteWidgetResponse]: ...

    async def get_widget_batch(self, request: GetWidgetBatchRequest) -> ServiceResult[GetWidgetBatchResponse]: ...

    async def mirror_fields(self, request: MirrorFieldsRequest) -> ServiceResult[MirrorFieldsResponse]: ...

    async def check_query(self, request: CheckQueryRequest) -> ServiceResult[CheckQueryResponse]: ...

    async def check_path(self, request: CheckPathRequest) -> ServiceResult[CheckPathResponse]: ...


__all__ = ["ConformanceApi", "OPERATIONS"]
