import pytest

from hosted_login import ResponseStatusTracker, RouteCategory, is_json_error_response

INTERNAL = RouteCategory.INTERNAL_ROUTES


@pytest.mark.parametrize("status", [400, 401, 404, 499, 501, 503])
def test_json_errors_on_internal_routes(status):
    assert is_json_error_response(INTERNAL, status, "application/json")


@pytest.mark.parametrize("status", [200, 302, 399, 500])
def test_non_error_or_500_statuses(status):
    assert not is_json_error_response(INTERNAL, status, "application/json")


@pytest.mark.parametrize("mime_type", ["text/html", "application/json; charset=utf-8", None])
def test_mime_type_must_be_exact(mime_type):
    assert not is_json_error_response(INTERNAL, 404, mime_type)


@pytest.mark.parametrize("category", [c for c in RouteCategory if c != INTERNAL])
def test_only_internal_routes(category):
    assert not is_json_error_response(category, 404, "application/json")


def test_consume_clears_pending():
    tracker = ResponseStatusTracker()
    tracker.record("https://auth.example.com/identity/x", 404)

    pending = tracker.consume()
    assert pending.status == 404
    assert pending.url == "https://auth.example.com/identity/x"
    assert tracker.pending is None
    assert tracker.consume() is None


def test_record_keeps_latest_status():
    tracker = ResponseStatusTracker()
    tracker.record("u", 401)
    tracker.record("u", 403)
    assert tracker.consume().status == 403
