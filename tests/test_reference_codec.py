import pytest

from core.domain.errors import InvalidReferenceError
from core.domain.models import RequestDescriptor, ResolvedReference
from core.services.reference_codec import (
    alike,
    merge_headers,
    merge_options,
    to_request,
    update_request,
)


def _resolved(url: str, **fields) -> ResolvedReference:
    return ResolvedReference(
        request=RequestDescriptor(url=url, **fields),
        headers={"content-type": "text/plain"},
    )


def test_fresh_url_without_overrides_is_empty_request():
    request, headers = to_request("http://example.com/a")

    assert request.method is None
    assert request.url == "http://example.com/a"
    assert request.headers == {}
    assert request.body == b""
    assert request.options == []
    assert headers == {}


def test_fresh_url_takes_overrides():
    request, _ = to_request(
        "https://example.com",
        {
            "method": "post",
            "headers": {"Accept": "text/csv"},
            "body": b"x=1",
            "options": [("follow_redirects", True)],
        },
    )

    assert request.method == "POST"
    assert request.headers == {"Accept": "text/csv"}
    assert request.body == b"x=1"
    assert request.options == [("follow_redirects", True)]


def test_resolved_reference_merges_overrides_and_keeps_snapshot():
    ref = _resolved(
        "http://example.com",
        method="GET",
        headers={"Accept": "*/*", "X-Trace": "1"},
        options=[("timeout", 5)],
    )

    request, headers = to_request(
        ref,
        [("headers", {"Accept": "text/csv"}), ("options", [("follow_redirects", True)])],
    )

    assert request.url == "http://example.com"
    assert request.headers == {"Accept": "text/csv", "X-Trace": "1"}
    assert request.options == [("timeout", 5), ("follow_redirects", True)]
    assert headers == {"content-type": "text/plain"}
    # La referencia original no cambia.
    assert ref.request.headers == {"Accept": "*/*", "X-Trace": "1"}


@pytest.mark.parametrize("reference", [42, None, b"http://example.com", {"url": "http://example.com"}])
def test_other_shapes_are_invalid(reference):
    with pytest.raises(InvalidReferenceError) as excinfo:
        to_request(reference)
    assert excinfo.value.reason == "not an HTTP reference"


def test_update_request_replaces_method_and_body():
    request = RequestDescriptor(method="GET", url="http://example.com", body=b"old")

    updated = update_request(request, [("method", "put"), ("body", b"new")])

    assert updated.method == "PUT"
    assert updated.body == b"new"
    assert request.method == "GET"
    assert request.body == b"old"


def test_update_request_never_changes_url_and_ignores_unknown_keys():
    request = RequestDescriptor(url="http://example.com")

    updated = update_request(request, {"url": "http://evil.example", "timestamp": "client", "retries": 3})

    assert updated == request


def test_none_headers_and_options_are_noops():
    request = RequestDescriptor(url="http://example.com", headers={"A": "1"}, options=[("timeout", 1)])

    assert update_request(request, [("headers", None), ("options", None)]) == request


def test_merge_headers_last_write_wins():
    assert merge_headers({"A": "1", "B": "2"}, {"B": "3", "C": "4"}) == {"A": "1", "B": "3", "C": "4"}


def test_merge_options_behaves_like_a_keyword_merge():
    old = [("a", 1), ("b", 2), ("a", 9)]
    new = [("a", 3), ("d", 4)]

    assert merge_options(old, new) == [("b", 2), ("a", 3), ("d", 4)]
    assert merge_options(old, {}) == old


def test_sequential_merges_with_disjoint_keys_compose():
    base = RequestDescriptor(method="GET", url="http://example.com", headers={"A": "1"})
    first = [("headers", {"B": "2"}), ("body", b"payload")]
    second = [("method", "POST"), ("options", [("timeout", 3)])]

    assert update_request(update_request(base, first), second) == update_request(base, first + second)


def test_alike_compares_built_requests():
    assert alike("http://a", "http://a")
    assert not alike("http://a", "http://b")


def test_alike_ignores_header_snapshot():
    fresh_request, _ = to_request("http://a")
    resolved = ResolvedReference(request=fresh_request, headers={"etag": "abc"})

    assert alike(resolved, "http://a")
    assert alike("http://a", resolved)


def test_alike_distinguishes_request_shape():
    assert not alike(_resolved("http://a", method="GET"), "http://a")
    assert not alike(_resolved("http://a", options=[("timeout", 1)]), _resolved("http://a"))


def test_alike_is_false_for_invalid_references():
    assert not alike(42, "http://a")
    assert not alike("http://a", None)
