"""Loading of conformance fixture files.

Accepts either ``{"tests": [...]}`` or a bare list of test entries.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from conformance_server.models.fixtures import ConformanceTest, ConformanceTestFile

logger = logging.getLogger(__name__)


class FixtureLoadError(Exception):
    """Raised when a fixture file cannot be read or does not validate."""


def parse_conformance_tests(document: object) -> list[ConformanceTest]:
    if isinstance(document, list):
        document = {"tests": document}
    try:
        return ConformanceTestFile.model_validate(document).tests
    except ValidationError as e:
        raise FixtureLoadError(f"invalid conformance fixture document: {e}") from e


def load_conformance_tests(path: Union[str, Path]) -> list[ConformanceTest]:
    fixture_path = Path(path)
    try:
        document = json.loads(fixture_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read conformance fixtures %s: %s", fixture_path, e)
        raise FixtureLoadError(f"cannot read conformance fixtures {fixture_path}: {e}") from e
    try:
        tests = parse_conformance_tests(document)
    except FixtureLoadError:
        logger.error("Invalid conformance fixtures %s", fixture_path, exc_info=True)
        raise
    logger.info("fixtures.loaded", extra={"path": str(fixture_path), "count": len(tests)})
    return tests


__all__ = ["FixtureLoadError", "parse_conformance_tests", "load_conformance_tests"]
