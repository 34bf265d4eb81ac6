"""Functional tests for widget endpoints over the in-memory service.

Covers creation headers, conditional GET (ETag / If-None-Match),
delete precedence (not-found before conflict) and batch alignment.
"""

from __future__ import annotations

import pytest


def test_get_api_info(memory_client):
    resp = memory_client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"service": "ConformanceApi", "version": "test"}


def test_list_widgets_wraps_results(memory_client):
    resp = memory_client.get("/widgets")
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"widgets"}
    assert [w["id"] for w in body["widgets"]] == [1, 2, 3]


def test_list_widgets_filters_by_query(memory_client):
    resp = memory_client.get("/widgets", params={"q": "TW"})
    assert [w["name"] for w in resp.json()["widgets"]] == ["two"]


def test_create_widget_returns_201_location_and_etag(memory_client):
    resp = memory_client.post("/widgets", json={"name": "shiny", "weight": 0.5})
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "shiny"
    assert resp.headers["Location"] == f"/widgets/{body['id']}"
    assert resp.headers["ETag"] == memory_client.api.etag_for(body["id"])

    fetched = memory_client.get(resp.headers["Location"])
    assert fetched.status_code == 200
    assert fetched.json() == body
    assert fetched.headers["ETag"] == resp.headers["ETag"]


def test_create_widget_without_body_is_invalid_request(memory_client):
    resp = memory_client.post("/widgets")
    assert resp.status_code == 400
    assert resp.json()["code"] == "InvalidRequest"


def test_get_widget_sets_etag(memory_client):
    resp = memory_client.get("/widgets/1")
    assert resp.status_code == 200
    assert resp.json()["name"] == "one"
    assert resp.headers["ETag"].startswith('"')


def test_get_widget_if_none_match_current_etag_is_304(memory_client):
    etag = memory_client.get("/widgets/2").headers["ETag"]
    resp = memory_client.get("/widgets/2", headers={"If-None-Match": etag})
    assert resp.status_code == 304
    assert resp.content == b""
    assert resp.headers["ETag"] == etag


def test_get_widget_if_none_match_weak_form_matches(memory_client):
    etag = memory_client.get("/widgets/2").headers["ETag"]
    resp = memory_client.get("/widgets/2", headers={"If-None-Match": f'"other", W/{etag}'})
    assert resp.status_code == 304


def test_get_widget_stale_if_none_match_returns_body(memory_client):
    resp = memory_client.get("/widgets/2", headers={"If-None-Match": '"stale"'})
    assert resp.status_code == 200
    assert resp.json()["id"] == 2


def test_get_missing_widget_is_404(memory_client):
    resp = memory_client.get("/widgets/999")
    assert resp.status_code == 404
    assert resp.json()["code"] == "NotFound"


def test_delete_widget_is_204_and_removes_it(memory_client):
    etag = memory_client.get("/widgets/3").headers["ETag"]
    resp = memory_client.delete("/widgets/3", headers={"If-Match": etag})
    assert resp.status_code == 204
    assert resp.content == b""
    assert memory_client.get("/widgets/3").status_code == 404


def test_delete_missing_widget_is_404_before_conflict(memory_client):
    resp = memory_client.delete("/widgets/999", headers={"If-Match": '"stale"'})
    assert resp.status_code == 404
    assert resp.content == b""


def test_delete_with_stale_if_match_is_409(memory_client):
    resp = memory_client.delete("/widgets/1", headers={"If-Match": '"stale"'})
    assert resp.status_code == 409
    assert memory_client.get("/widgets/1").status_code == 200


def test_delete_with_wildcard_if_match(memory_client):
    resp = memory_client.delete("/widgets/1", headers={"If-Match": "*"})
    assert resp.status_code == 204


def test_batch_results_align_with_requested_ids(memory_client):
    resp = memory_client.post("/widgets/get", json=[1, 3, 999])
    assert resp.status_code == 200
    results = resp.json()
    assert len(results) == 3
    assert results[0]["value"]["id"] == 1
    assert results[1]["value"]["id"] == 3
    assert results[2] == {"error": {"code": "NotFound", "message": "Widget 999 not found."}}


@pytest.mark.parametrize("body", [[], {"ids": [1]}])
def test_batch_rejects_empty_or_non_list_ids(memory_client, body):
    resp = memory_client.post("/widgets/get", json=body)
    assert resp.status_code == 400


def test_batch_over_limit_is_request_too_large(memory_client):
    resp = memory_client.post("/widgets/get", json=list(range(1, 12)))
    assert resp.status_code == 413
    assert resp.json()["code"] == "RequestTooLarge"


def test_batch_route_is_not_shadowed_by_widget_id_route(memory_client):
    resp = memory_client.get("/widgets/get")
    # GET binds "get" as an unparseable id rather than hitting the batch route
    assert resp.status_code == 400


def test_responses_carry_request_id(memory_client):
    resp = memory_client.get("/", headers={"X-Request-Id": "abc-123"})
    assert resp.headers["X-Request-Id"] == "abc-123"
    assert memory_client.get("/").headers["X-Request-Id"]
