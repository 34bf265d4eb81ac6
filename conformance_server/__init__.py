"""FastAPI conformance server.

Exposes the fixed conformance REST surface and binds raw HTTP input to
typed requests for a pluggable API service. Request binding lives in
`conformance_server/logic/binding.py`, result shaping in
`conformance_server/logic/shaping.py`, and route wiring in
`conformance_server/routes/`.
"""

from __future__ import annotations

__version__ = "1.0.0"

from conformance_server.main import create_app  # noqa: E402

__all__ = ["create_app", "__version__"]
