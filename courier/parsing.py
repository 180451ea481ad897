import json
from urllib.parse import urlparse

from .errors import ValidationError
from .models import RequestSpec, Succeeded

SUPPORTED_SCHEMES = {"http", "https"}


def validate_url(url: str) -> str:
    """Return the trimmed URL or raise ValidationError."""
    url = url.strip()
    if not url:
        raise ValidationError("URL cannot be empty.")
    parsed = urlparse(url)
    if parsed.scheme not in SUPPORTED_SCHEMES or not url.lower().startswith(f"{parsed.scheme}://"):
        raise ValidationError(f"Unsupported URL scheme: {parsed.scheme or 'missing'}")
    if not parsed.netloc:
        raise ValidationError("Missing host in URL.")
    return url


def clean_pair(key: str, value: str) -> tuple[str, str]:
    key = key.strip()
    value = value.strip()
    if not key:
        raise ValidationError("Key cannot be empty.")
    if not value:
        raise ValidationError("Value cannot be empty.")
    return key, value


def parse_pair(raw: str, separator: str) -> tuple[str, str]:
    """Split 'Key: Value' (or 'key=value') into a cleaned pair."""
    if separator not in raw:
        raise ValidationError(f"Expected {separator!r} in {raw!r}")
    key, value = raw.split(separator, 1)
    return clean_pair(key, value)


def format_body(body: str, content_type: str | None = None) -> str:
    """Pretty-print JSON bodies; XML, HTML and plain text pass through untouched."""
    if not body.strip():
        return ""
    kind = (content_type or "").lower()
    if any(marker in kind for marker in ("xml", "html", "text/plain")):
        return body
    try:
        parsed = json.loads(body)
    except ValueError:
        return body
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def looks_like_json(text: str) -> bool:
    stripped = text.strip()
    if not stripped.startswith(("{", "[")):
        return False
    try:
        json.loads(stripped)
    except ValueError:
        return False
    return True


def format_response_body(response: Succeeded) -> str:
    """Body text as shown in the response panel."""
    if response.is_xml():
        return response.body
    if response.is_json():
        return format_body(response.body, "application/json")
    return format_body(response.body, response.content_type())


def describe_request(spec: RequestSpec) -> str:
    url = spec.url or "<no URL>"
    has_body = "Yes" if spec.body else "No"
    return (
        f"{spec.method.value} {url} "
        f"(Headers: {len(spec.headers)}, Params: {len(spec.params)}, Body: {has_body})"
    )
