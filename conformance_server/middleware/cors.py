"""CORS configuration helpers.

Applies CORS with the response headers conformance clients must be able
to read from browsers.
"""

from __future__ import annotations

from typing import Iterable
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


EXPOSE_HEADERS: list[str] = [
    "ETag",
    "Location",
    "X-Request-Id",
]


def apply_cors(app: FastAPI, *, origins: Iterable[str] | None = None) -> None:
    allow_origins = list(origins or ["*"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials="*" not in allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=EXPOSE_HEADERS,
    )


__all__ = ["apply_cors", "EXPOSE_HEADERS"]
