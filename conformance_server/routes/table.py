"""Static routing table for the conformance API.

Each route wires one HTTP method and path template to its binder, the
API service operation it calls, and the shaper for the typed result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from fastapi import Request
from fastapi.responses import Response

from conformance_server.logic import binding, shaping

Binder = Callable[[Request], Awaitable[Any]]
Shaper = Callable[[Any], Response]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    operation: str
    bind: Binder
    shape: Shaper
    summary: str = ""


CHECK_PATH_TEMPLATE = "/checkPath/" + "/".join("{%s}" % name for name in binding.CHECK_FIELDS)

# POST /widgets/get precedes the /widgets/{id} templates
ROUTES: tuple[Route, ...] = (
    Route("GET", "/", "get_api_info", binding.bind_get_api_info, shaping.shape_get_api_info,
          "Get API information"),
    Route("GET", "/widgets", "get_widgets", binding.bind_get_widgets, shaping.shape_get_widgets,
          "Search widgets"),
    Route("POST", "/widgets", "create_widget", binding.bind_create_widget, shaping.shape_create_widget,
          "Create a widget"),
    Route("POST", "/widgets/get", "get_widget_batch", binding.bind_get_widget_batch,
          shaping.shape_get_widget_batch, "Get a batch of widgets"),
    Route("GET", "/widgets/{id}", "get_widget", binding.bind_get_widget, shaping.shape_get_widget,
          "Get a widget"),
    Route("DELETE", "/widgets/{id}", "delete_widget", binding.bind_delete_widget, shaping.shape_delete_widget,
          "Delete a widget"),
    Route("POST", "/mirrorFields", "mirror_fields", binding.bind_mirror_fields, shaping.shape_mirror_fields,
          "Mirror request fields"),
    Route("GET", "/checkQuery", "check_query", binding.bind_check_query, shaping.shape_check_query,
          "Check typed query parameters"),
    Route("GET", CHECK_PATH_TEMPLATE, "check_path", binding.bind_check_path, shaping.shape_check_path,
          "Check typed path segments"),
)


__all__ = ["Route", "ROUTES", "CHECK_PATH_TEMPLATE"]
