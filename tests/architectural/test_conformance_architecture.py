"""Architectural tests for the conformance server.

These are static, file/AST-based checks. They avoid executing application
code and only read files under the package directory. Parsing errors are
surfaced as assertions rather than crashes.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Iterator

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]
PACKAGE_DIR = PROJECT_ROOT / "conformance_server"
ERROR_MAPPING = PACKAGE_DIR / "config" / "error_mapping.py"
ROUTE_TABLE = PACKAGE_DIR / "routes" / "table.py"
BINDING = PACKAGE_DIR / "logic" / "binding.py"
SHAPING = PACKAGE_DIR / "logic" / "shaping.py"

EXPECTED_ROUTES = {
    ("GET", "/"): "get_api_info",
    ("GET", "/widgets"): "get_widgets",
    ("POST", "/widgets"): "create_widget",
    ("POST", "/widgets/get"): "get_widget_batch",
    ("GET", "/widgets/{id}"): "get_widget",
    ("DELETE", "/widgets/{id}"): "delete_widget",
    ("POST", "/mirrorFields"): "mirror_fields",
    ("GET", "/checkQuery"): "check_query",
}


def _parse(path: Path) -> ast.Module:
    try:
        return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    except FileNotFoundError:
        pytest.fail(f"Expected file is missing: {path}")
    except SyntaxError as exc:
        pytest.fail(f"Cannot parse {path}: {exc}")


def _package_modules() -> Iterator[Path]:
    yield from sorted(PACKAGE_DIR.rglob("*.py"))


def _route_calls() -> list[ast.Call]:
    tree = _parse(ROUTE_TABLE)
    return [
        node
        for node in ast.walk(tree)
        if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) and node.func.id == "Route"
    ]


def test_error_statuses_are_declared_only_in_error_mapping():
    """Only the error mapping module may pair symbolic codes with statuses."""
    offenders: list[str] = []
    for path in _package_modules():
        if path == ERROR_MAPPING:
            continue
        for node in ast.walk(_parse(path)):
            if not isinstance(node, ast.Dict):
                continue
            for key, value in zip(node.keys, node.values):
                if (
                    isinstance(key, ast.Constant)
                    and key.value in {"NotFound", "InvalidRequest", "Conflict", "NotModified"}
                    and isinstance(value, ast.Constant)
                    and isinstance(value.value, int)
                ):
                    offenders.append(f"{path.relative_to(PROJECT_ROOT)}:{node.lineno}")
    assert not offenders, f"error status literals outside error_mapping: {offenders}"


def test_shaping_resolves_errors_through_error_mapping():
    tree = _parse(SHAPING)
    imported = {
        alias.name
        for node in ast.walk(tree)
        if isinstance(node, ast.ImportFrom) and node.module == "conformance_server.config.error_mapping"
        for alias in node.names
    }
    assert "status_for_error_code" in imported


def test_route_table_declares_every_endpoint_once():
    seen: dict[tuple[str, str], str] = {}
    for call in _route_calls():
        method, path, operation = (call.args[0], call.args[1], call.args[2])
        assert isinstance(method, ast.Constant) and isinstance(operation, ast.Constant)
        if isinstance(path, ast.Constant):
            key = (method.value, path.value)
            assert key not in seen, f"duplicate route {key}"
            seen[key] = operation.value
    assert seen == EXPECTED_ROUTES
    assert len(_route_calls()) == len(EXPECTED_ROUTES) + 1  # plus the checkPath template


def test_route_binders_and_shapers_match_operation_names():
    for call in _route_calls():
        operation = call.args[2].value  # type: ignore[attr-defined]
        bind, shape = call.args[3], call.args[4]
        assert isinstance(bind, ast.Attribute) and bind.attr == f"bind_{operation}"
        assert isinstance(shape, ast.Attribute) and shape.attr == f"shape_{operation}"


def test_batch_route_precedes_widget_id_routes():
    order = [
        call.args[1].value
        for call in _route_calls()
        if isinstance(call.args[1], ast.Constant)
    ]
    assert order.index("/widgets/get") < order.index("/widgets/{id}")


def test_binders_never_raise():
    """Binding failures degrade to unset fields; binders contain no raise."""
    raises = [node.lineno for node in ast.walk(_parse(BINDING)) if isinstance(node, ast.Raise)]
    assert not raises, f"raise statements in binding.py at lines {raises}"


def test_no_bare_except_in_package():
    offenders = [
        f"{path.relative_to(PROJECT_ROOT)}:{node.lineno}"
        for path in _package_modules()
        for node in ast.walk(_parse(path))
        if isinstance(node, ast.ExceptHandler) and node.type is None
    ]
    assert not offenders, f"bare except clauses: {offenders}"
