from types import SimpleNamespace

import pytest

from fitplan.planning.fallback.provider_errors import (
    resolve_provider_failure_cause,
    resolve_provider_failure_debug,
)


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        ({"code": "AI_REQUEST_FAILED"}, "AI_REQUEST_FAILED"),
        ({"code": "AI_AUTH_FAILED"}, "AI_REQUEST_FAILED"),
        ({"code": "AI_PARSE_FAILED"}, "AI_PARSE_FAILED"),
        ({"code": 500}, "UNKNOWN"),
        ({}, "UNKNOWN"),
        (None, "UNKNOWN"),
        (ValueError("boom"), "UNKNOWN"),
        (SimpleNamespace(code="AI_AUTH_FAILED"), "AI_REQUEST_FAILED"),
    ],
)
def test_resolve_provider_failure_cause(error, expected):
    assert resolve_provider_failure_cause(error) == expected


def test_debug_keeps_only_safe_fields():
    error = {
        "code": "AI_AUTH_FAILED",
        "debug": {
            "status": 401,
            "requestId": "req_123",
            "providerCode": "invalid_api_key",
            "cause": "NETWORK_ERROR",
            "apiKey": "sk-secret",
            "body": "raw provider response",
        },
    }
    assert resolve_provider_failure_debug(error) == {
        "cause": "AI_REQUEST_FAILED",
        "status": 401,
        "requestId": "req_123",
        "providerCode": "invalid_api_key",
        "providerCause": "NETWORK_ERROR",
    }


def test_debug_drops_malformed_fields():
    error = {
        "code": "AI_REQUEST_FAILED",
        "debug": {"status": "500", "requestId": "", "providerCode": 42, "cause": "TIMEOUT"},
    }
    assert resolve_provider_failure_debug(error) == {"cause": "AI_REQUEST_FAILED"}


def test_debug_without_payload():
    assert resolve_provider_failure_debug({"code": "AI_REQUEST_FAILED"}) == {"cause": "AI_REQUEST_FAILED"}


def test_debug_from_error_object():
    error = SimpleNamespace(code="AI_REQUEST_FAILED", debug={"status": 503})
    assert resolve_provider_failure_debug(error) == {"cause": "AI_REQUEST_FAILED", "status": 503}


@pytest.mark.parametrize("error", [{"code": "AI_PARSE_FAILED", "debug": {"status": 500}}, {}, None])
def test_debug_is_none_for_other_failures(error):
    assert resolve_provider_failure_debug(error) is None
