"""Functional tests for the shared error table and error response shaping."""

from __future__ import annotations

import pytest

from conformance_server.config.error_mapping import STANDARD_ERROR_CODES, status_for_error_code
from conformance_server.models.results import GetApiInfoResponse, GetWidgetResponse, ServiceResult

EXPECTED = {
    "NotModified": 304,
    "InvalidRequest": 400,
    "NotAuthenticated": 401,
    "NotAuthorized": 403,
    "NotFound": 404,
    "Conflict": 409,
    "RequestTooLarge": 413,
    "TooManyRequests": 429,
    "InternalError": 500,
    "ServiceUnavailable": 503,
    "NotAdmin": 403,
}


def test_table_is_exactly_the_standard_codes():
    assert STANDARD_ERROR_CODES == EXPECTED


@pytest.mark.parametrize("code, status", sorted(EXPECTED.items()))
def test_known_codes_map_to_table_status(code, status):
    assert status_for_error_code(code) == status


@pytest.mark.parametrize("code", ["Teapot", "notfound", "", None])
def test_unknown_or_missing_codes_fall_back_to_500(code):
    assert status_for_error_code(code) == 500


def test_error_result_status_and_body(stub_api, stub_client):
    stub_api.results["get_widget"] = ServiceResult[GetWidgetResponse].failure("NotFound", "gone")
    resp = stub_client.get("/widgets/5")
    assert resp.status_code == 404
    assert resp.json() == {"code": "NotFound", "message": "gone"}


def test_error_without_message_omits_message(stub_api, stub_client):
    stub_api.results["get_api_info"] = ServiceResult[GetApiInfoResponse].failure("TooManyRequests")
    resp = stub_client.get("/")
    assert resp.status_code == 429
    assert resp.json() == {"code": "TooManyRequests"}


def test_unmapped_error_code_is_500(stub_api, stub_client):
    stub_api.results["get_api_info"] = ServiceResult[GetApiInfoResponse].failure("Teapot", "short and stout")
    resp = stub_client.get("/")
    assert resp.status_code == 500
    assert resp.json() == {"code": "Teapot", "message": "short and stout"}


def test_error_arm_wins_over_value(stub_api, stub_client):
    stub_api.results["get_api_info"] = ServiceResult[GetApiInfoResponse](
        value=GetApiInfoResponse(service="x"),
        error={"code": "ServiceUnavailable"},
    )
    resp = stub_client.get("/")
    assert resp.status_code == 503


def test_unknown_route_uses_error_body_shape(memory_client):
    resp = memory_client.get("/no-such-route")
    assert resp.status_code == 404
    assert resp.json()["code"] == "NotFound"
