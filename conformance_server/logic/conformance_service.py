"""Fixture-driven API service.

Answers each call by locating the conformance test whose method and
request match the incoming typed request, then replaying that test's
literal response as a typed result.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable

from fastapi.encoders import jsonable_encoder

from conformance_server.logic.api_service import OPERATIONS
from conformance_server.models.fixtures import ConformanceTest
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
from conformance_server.models.results import ServiceResult
from conformance_server.models.wire import WireModel

logger = logging.getLogger(__name__)


class ConformanceApiService:
    def __init__(self, tests: Iterable[ConformanceTest]) -> None:
        self._tests: list[ConformanceTest] = list(tests)

    @property
    def tests(self) -> list[ConformanceTest]:
        return list(self._tests)

    async def _execute(self, operation: str, request: WireModel) -> ServiceResult:
        method, value_type = OPERATIONS[operation]
        result_type = ServiceResult[value_type]
        actual = jsonable_encoder(request.to_wire())

        candidates = [t for t in self._tests if t.method == method]
        if not candidates:
            logger.info("conformance.no_tests", extra={"method": method})
            return result_type.failure("InvalidRequest", f"No tests found for method {method}.")

        for test in candidates:
            if test.request == actual:
                logger.info("conformance.matched", extra={"method": method, "test": test.name})
                return result_type.model_validate(test.response)

        expected = [t.request for t in candidates]
        logger.info("conformance.unexpected_request", extra={"method": method, "request": actual})
        return result_type.failure(
            "InvalidRequest",
            f"Unexpected request for {method}: {json.dumps(actual, sort_keys=True)}; "
            f"expected one of {json.dumps(expected, sort_keys=True)}",
        )

    async def get_api_info(self, request: GetApiInfoRequest) -> ServiceResult:
        return await self._execute("get_api_info", request)

    async def get_widgets(self, request: GetWidgetsRequest) -> ServiceResult:
        return await self._execute("get_widgets", request)

    async def create_widget(self, request: CreateWidgetRequest) -> ServiceResult:
        return await self._execute("create_widget", request)

    async def get_widget(self, request: GetWidgetRequest) -> ServiceResult:
        return await self._execute("get_widget", request)

    async def delete_widget(self, request: DeleteWidgetRequest) -> ServiceResult:
        return await self._execute("delete_widget", request)

    async def get_widget_batch(self, request: GetWidgetBatchRequest) -> ServiceResult:
        return await self._execute("get_widget_batch", request)

    async def mirror_fields(self, request: MirrorFieldsRequest) -> ServiceResult:
        return await self._execute("mirror_fields", request)

    async def check_query(self, request: CheckQueryRequest) -> ServiceResult:
        return await self._execute("check_query", request)

    async def check_path(self, request: CheckPathRequest) -> ServiceResult:
        return await self._execute("check_path", request)


__all__ = ["ConformanceApiService"]
