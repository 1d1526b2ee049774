"""Classify provider failures that send the orchestrator down the fallback path.

Errors come from the orchestrator's model client and are only inspected for
a `code` and a `debug` mapping; anything else is reported as UNKNOWN.
"""

from collections.abc import Mapping
from typing import Any

REQUEST_FAILURE_CODES = frozenset({"AI_REQUEST_FAILED", "AI_AUTH_FAILED"})


def _error_code(error: Any) -> str | None:
    if isinstance(error, Mapping):
        code = error.get("code")
    else:
        code = getattr(error, "code", None)
    return code if isinstance(code, str) else None


def _error_debug(error: Any) -> Mapping[str, Any]:
    debug = error.get("debug") if isinstance(error, Mapping) else getattr(error, "debug", None)
    return debug if isinstance(debug, Mapping) else {}


def resolve_provider_failure_cause(error: Any) -> str:
    """Failure cause code; auth failures are reported as request failures."""
    code = _error_code(error)
    if code in REQUEST_FAILURE_CODES:
        return "AI_REQUEST_FAILED"
    return code or "UNKNOWN"


def resolve_provider_failure_debug(error: Any) -> dict[str, Any] | None:
    """Sanitized debug info for request/auth failures, None for anything else.

    Only the HTTP status, request id, provider code and a network cause are
    kept; everything else in the provider's debug payload is dropped.
    """
    if _error_code(error) not in REQUEST_FAILURE_CODES:
        return None

    source = _error_debug(error)
    safe_debug: dict[str, Any] = {"cause": "AI_REQUEST_FAILED"}

    status = source.get("status")
    if isinstance(status, int | float) and not isinstance(status, bool):
        safe_debug["status"] = status
    request_id = source.get("requestId")
    if isinstance(request_id, str) and request_id:
        safe_debug["requestId"] = request_id
    provider_code = source.get("providerCode")
    if isinstance(provider_code, str) and provider_code:
        safe_debug["providerCode"] = provider_code
    if source.get("cause") == "NETWORK_ERROR":
        safe_debug["providerCause"] = "NETWORK_ERROR"

    return safe_debug
