"""In-process API service backed by a dict widget store.

Used when no conformance fixture file is configured. Widgets are opaque
JSON objects keyed by integer id; each stored widget carries an ETag
derived from its content so conditional requests behave like a real
backend.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Optional

from conformance_server.logic.etag import compute_widget_etag, etag_matches
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
    Widget,
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

logger = logging.getLogger(__name__)

SERVICE_NAME = "ConformanceApi"

SEED_WIDGETS: tuple[Widget, ...] = (
    {"id": 1, "name": "one", "weight": 1.5, "price": 1.25},
    {"id": 2, "name": "two", "weight": 2.5, "price": 2.5},
    {"id": 3, "name": "three", "weight": 3.5, "price": 3.75},
)


class InMemoryWidgetService:
    def __init__(
        self,
        widgets: Optional[Iterable[Widget]] = None,
        *,
        max_batch_size: int = 10,
        version: Optional[str] = None,
    ) -> None:
        self._widgets: dict[int, Widget] = {}
        self._etags: dict[int, str] = {}
        self.max_batch_size = max_batch_size
        self.version = version
        for widget in SEED_WIDGETS if widgets is None else widgets:
            self._store(int(widget["id"]), dict(widget))

    def _store(self, widget_id: int, widget: Widget) -> str:
        widget["id"] = widget_id
        etag = compute_widget_etag(widget)
        self._widgets[widget_id] = widget
        self._etags[widget_id] = etag
        return etag

    def _next_id(self) -> int:
        return max(self._widgets, default=0) + 1

    def etag_for(self, widget_id: int) -> Optional[str]:
        return self._etags.get(widget_id)

    async def get_api_info(self, request: GetApiInfoRequest) -> ServiceResult[GetApiInfoResponse]:
        return ServiceResult[GetApiInfoResponse].success(
            GetApiInfoResponse(service=SERVICE_NAME, version=self.version)
        )

    async def get_widgets(self, request: GetWidgetsRequest) -> ServiceResult[GetWidgetsResponse]:
        needle = (request.query or "").lower()
        widgets = [
            copy.deepcopy(w)
            for _id, w in sorted(self._widgets.items())
            if not needle or needle in str(w.get("name", "")).lower()
        ]
        return ServiceResult[GetWidgetsResponse].success(GetWidgetsResponse(widgets=widgets))

    async def create_widget(self, request: CreateWidgetRequest) -> ServiceResult[CreateWidgetResponse]:
        if not isinstance(request.widget, dict):
            return ServiceResult[CreateWidgetResponse].failure("InvalidRequest", "Widget is required.")
        widget_id = self._next_id()
        widget = copy.deepcopy(request.widget)
        etag = self._store(widget_id, widget)
        logger.info("widgets.created", extra={"widget_id": widget_id, "etag": etag})
        return ServiceResult[CreateWidgetResponse].success(
            CreateWidgetResponse(widget=copy.deepcopy(widget), url=f"/widgets/{widget_id}", e_tag=etag)
        )

    async def get_widget(self, request: GetWidgetRequest) -> ServiceResult[GetWidgetResponse]:
        if request.id is None:
            return ServiceResult[GetWidgetResponse].failure("InvalidRequest", "Widget id is required.")
        widget = self._widgets.get(request.id)
        if widget is None:
            return ServiceResult[GetWidgetResponse].failure("NotFound", f"Widget {request.id} not found.")
        etag = self._etags[request.id]
        if etag_matches(etag, request.if_not_e_tag):
            return ServiceResult[GetWidgetResponse].success(GetWidgetResponse(e_tag=etag, not_modified=True))
        return ServiceResult[GetWidgetResponse].success(
            GetWidgetResponse(widget=copy.deepcopy(widget), e_tag=etag)
        )

    async def delete_widget(self, request: DeleteWidgetRequest) -> ServiceResult[DeleteWidgetResponse]:
        if request.id is None:
            return ServiceResult[DeleteWidgetResponse].failure("InvalidRequest", "Widget id is required.")
        if request.id not in self._widgets:
            return ServiceResult[DeleteWidgetResponse].success(DeleteWidgetResponse(not_found=True))
        if request.if_e_tag is not None and not etag_matches(self._etags[request.id], request.if_e_tag):
            logger.info("widgets.delete_conflict", extra={"widget_id": request.id})
            return ServiceResult[DeleteWidgetResponse].success(DeleteWidgetResponse(conflict=True))
        del self._widgets[request.id]
        del self._etags[request.id]
        logger.info("widgets.deleted", extra={"widget_id": request.id})
        return ServiceResult[DeleteWidgetResponse].success(DeleteWidgetResponse())

    def _lookup(self, widget_id: Any) -> ServiceResult[Widget]:
        if not isinstance(widget_id, int) or isinstance(widget_id, bool):
            return ServiceResult[Widget].failure("InvalidRequest", f"Invalid widget id: {widget_id!r}.")
        widget = self._widgets.get(widget_id)
        if widget is None:
            return ServiceResult[Widget].failure("NotFound", f"Widget {widget_id} not found.")
        return ServiceResult[Widget].success(copy.deepcopy(widget))

    async def get_widget_batch(self, request: GetWidgetBatchRequest) -> ServiceResult[GetWidgetBatchResponse]:
        ids = request.ids
        if not isinstance(ids, list) or not ids:
            return ServiceResult[GetWidgetBatchResponse].failure("InvalidRequest", "Widget ids are required.")
        if len(ids) > self.max_batch_size:
            return ServiceResult[GetWidgetBatchResponse].failure(
                "RequestTooLarge", f"At most {self.max_batch_size} widget ids may be requested."
            )
        return ServiceResult[GetWidgetBatchResponse].success(
            GetWidgetBatchResponse(results=[self._lookup(widget_id) for widget_id in ids])
        )

    async def mirror_fields(self, request: MirrorFieldsRequest) -> ServiceResult[MirrorFieldsResponse]:
        return ServiceResult[MirrorFieldsResponse].success(
            MirrorFieldsResponse(field=request.field, matrix=request.matrix)
        )

    async def check_query(self, request: CheckQueryRequest) -> ServiceResult[CheckQueryResponse]:
        return ServiceResult[CheckQueryResponse].success(CheckQueryResponse(**request.model_dump()))

    async def check_path(self, request: CheckPathRequest) -> ServiceResult[CheckPathResponse]:
        return ServiceResult[CheckPathResponse].success(CheckPathResponse(**request.model_dump()))


__all__ = ["InMemoryWidgetService", "SEED_WIDGETS", "SERVICE_NAME"]
