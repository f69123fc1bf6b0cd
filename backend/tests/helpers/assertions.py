"""Assertion helper utilities for tests."""

from __future__ import annotations


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``.

    Parameters
    ----------
    data:
        JSON object under test.
    required:
        Set of required keys that must exist in ``data``.

    Raises
    ------
    AssertionError
        If any required key is missing.
    """

    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def assert_problem(resp, status: int, code: str | None = None) -> dict:
    """Validate an RFC 7807 error response and return its body.

    Parameters
    ----------
    resp:
        Flask test response.
    status:
        Expected HTTP status.
    code:
        Expected machine-readable ``code``, when given.
    """

    assert resp.status_code == status, resp.get_data(as_text=True)
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert_json_keys(body, {"type", "title", "status", "detail", "code", "request_id"})
    assert body["status"] == status
    if code is not None:
        assert body["code"] == code
    return body


def assert_page(obj: dict) -> None:
    """Validate the post listing envelope."""

    assert_json_keys(
        obj, {"posts", "page", "size", "totalElements", "totalPages", "hasNext", "hasPrevious"}
    )
    assert isinstance(obj["posts"], list)
