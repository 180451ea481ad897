# ruff: noqa: S101
import pytest

from courier.errors import ValidationError
from courier.models import HttpMethod, RequestSpec, Succeeded
from courier.parsing import (
    clean_pair,
    describe_request,
    format_body,
    format_response_body,
    looks_like_json,
    parse_pair,
    validate_url,
)


def test_validate_url_strips_whitespace():
    assert validate_url("  https://example.com/a  ") == "https://example.com/a"


def test_validate_url_rejects_empty():
    with pytest.raises(ValidationError, match="URL cannot be empty"):
        validate_url("   ")


@pytest.mark.parametrize("url", ["ftp://example.com", "example.com/path", "file:///etc/passwd"])
def test_validate_url_rejects_unsupported_scheme(url):
    with pytest.raises(ValidationError, match="Unsupported URL scheme"):
        validate_url(url)


def test_validate_url_requires_host():
    with pytest.raises(ValidationError, match="Missing host"):
        validate_url("http://")


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        validate_url("")


def test_clean_pair_trims():
    assert clean_pair("  Accept ", " text/plain ") == ("Accept", "text/plain")


def test_clean_pair_rejects_blank_key_and_value():
    with pytest.raises(ValidationError, match="Key cannot be empty"):
        clean_pair(" ", "x")
    with pytest.raises(ValidationError, match="Value cannot be empty"):
        clean_pair("x", "")


def test_parse_pair_splits_on_first_separator():
    assert parse_pair("Authorization: Bearer a:b", ":") == ("Authorization", "Bearer a:b")
    assert parse_pair("q=a=b", "=") == ("q", "a=b")


def test_parse_pair_requires_separator():
    with pytest.raises(ValidationError, match="Expected"):
        parse_pair("NoColonHere", ":")


def test_format_body_pretty_prints_json():
    formatted = format_body('{"ok":true,"name":"café"}', "application/json")
    assert formatted == '{\n  "ok": true,\n  "name": "café"\n}'


def test_format_body_guesses_json_without_content_type():
    assert format_body("[1,2]") == "[\n  1,\n  2\n]"


def test_format_body_leaves_xml_and_text_alone():
    assert format_body('{"a":1}', "text/plain; charset=utf-8") == '{"a":1}'
    assert format_body("<a>1</a>", "application/xml") == "<a>1</a>"


def test_format_body_passes_through_invalid_json():
    assert format_body("not json", "application/json") == "not json"


def test_format_body_empty():
    assert format_body("   ") == ""


def test_describe_request():
    spec = RequestSpec(url="https://a.test", method=HttpMethod.POST, headers=[("A", "1")], body="{}")
    assert describe_request(spec) == "POST https://a.test (Headers: 1, Params: 0, Body: Yes)"
    assert describe_request(RequestSpec()) == "GET <no URL> (Headers: 0, Params: 0, Body: No)"


def test_looks_like_json():
    assert looks_like_json(' {"a": [1, 2]} ')
    assert looks_like_json("[]")
    assert not looks_like_json("42")
    assert not looks_like_json("{broken")
    assert not looks_like_json("")


def _succeeded(body, content_type=None):
    headers = (("Content-Type", content_type),) if content_type else ()
    return Succeeded(status=200, headers=headers, body=body, elapsed_ms=1.0)


def test_format_response_body_uses_content_type():
    assert format_response_body(_succeeded('{"a":1}', "application/json")) == '{\n  "a": 1\n}'
    assert format_response_body(_succeeded('{"a":1}', "text/xml")) == '{"a":1}'
    assert format_response_body(_succeeded("<a/>", "application/xml; charset=utf-8")) == "<a/>"


def test_format_response_body_guesses_without_content_type():
    assert format_response_body(_succeeded("[1]")) == "[\n  1\n]"
    assert format_response_body(_succeeded("plain words")) == "plain words"
