"""
HTTP request layer and logging helpers for trello-cli.
"""

import hashlib
import http.client
import json
import re
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from trello_cli import config
from trello_cli.exceptions import (
    BadResponseError,
    DecodeError,
    HTTPError,
    RequestError,
    TransportError,
)

_SECRET_PARAMS = frozenset({"key", "token"})


# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _sanitize_url_for_log(url):
    """Mask credential query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in _SECRET_PARAMS:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _log_http_event(**fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.HTTP_LOG_ENABLED:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.HTTP_LOG_SAMPLE_RATE
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


# ---------------------------------------------------------------------------
# URL construction
# ---------------------------------------------------------------------------


def _path_segment(value):
    """Percent-escape a resource id for use as one path segment."""
    return urllib.parse.quote(str(value), safe="")


def auth_params(key, token, params=()):
    """Return query pairs with the key first and the token last (if set)."""
    pairs = [("key", key)]
    pairs.extend(params)
    if token:
        pairs.append(("token", token))
    return pairs


def build_url(path, params=()):
    """Join the API base, *path* and an ordered list of query pairs."""
    url = config.BASE_URL + config.API_PREFIX + path
    query = urllib.parse.urlencode(list(params))
    return f"{url}?{query}" if query else url


def _expect_object_response(result, operation):
    """Ensure a decoded body is a JSON object (dict)."""
    if isinstance(result, dict):
        return result
    raise DecodeError(
        f"[ERROR] Unexpected {operation} response shape: "
        f"expected JSON object, got {type(result).__name__}."
    )


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def _decode_body(raw, content_type):
    try:
        return json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        if content_type and "json" not in content_type.lower():
            raise DecodeError(
                f"[ERROR] Unexpected Content-Type from server ({content_type}): {e}"
            ) from e
        raise DecodeError(
            f"[ERROR] Unexpected response from Trello API (not valid JSON): {e}"
        ) from e


def _http_request(url, method="GET", decode=True):
    """Make exactly one HTTP request.

    Returns parsed JSON on success, or None when *decode* is False.
    Raises HTTPError for non-2xx answers (caller converts it),
    RequestError / TransportError / DecodeError for everything else.
    The response is always closed before returning.
    """
    request_id = str(uuid.uuid4())
    headers = {"Accept": "application/json", "X-Request-Id": request_id}
    safe_url = _sanitize_url_for_log(url)
    sampled = _is_sampled_request(request_id)
    timeout = max(1, config.HTTP_TIMEOUT_SECONDS)

    try:
        req = urllib.request.Request(url, headers=headers, method=method)
    except ValueError as e:
        raise RequestError(f"[ERROR] Could not build {method} request: {e}") from e

    if sampled:
        _log_http_event(
            phase="request",
            method=method,
            url=safe_url,
            request_id=request_id,
            timeout_seconds=timeout,
        )
    start = time.perf_counter()
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = getattr(resp, "status", 200)
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.HTTP_MAX_RESPONSE_BYTES + 1)
            if sampled:
                _log_http_event(
                    phase="response",
                    method=method,
                    url=safe_url,
                    status=status,
                    content_type=content_type,
                    bytes=len(raw),
                    latency_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
            if not 200 <= status <= 299:
                reason = getattr(resp, "reason", "")
                raise HTTPError(status, reason, raw.decode("utf-8", "replace"))
            if not decode:
                return None
            if len(raw) > config.HTTP_MAX_RESPONSE_BYTES:
                raise DecodeError(
                    "[ERROR] Response too large from Trello API "
                    f"(>{config.HTTP_MAX_RESPONSE_BYTES} bytes)."
                )
            return _decode_body(raw, content_type)
    except urllib.error.HTTPError as e:
        try:
            error_body = e.read(config.HTTP_MAX_RESPONSE_BYTES).decode("utf-8", errors="replace")
        finally:
            e.close()
        if sampled:
            _log_http_event(
                phase="response",
                method=method,
                url=safe_url,
                status=e.code,
                detail=_sanitize_error(error_body, max_len=200),
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error="timeout",
                request_id=request_id,
            )
        raise TransportError(
            f"[ERROR] Request timed out after {timeout} seconds. Is Trello API reachable?"
        ) from e
    except urllib.error.URLError as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"url_error: {e.reason}",
                request_id=request_id,
            )
        raise TransportError(f"[ERROR] Connection failed: {e.reason}") from e
    except (ConnectionError, http.client.HTTPException) as e:
        if sampled:
            _log_http_event(
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"{type(e).__name__}: {e}",
                request_id=request_id,
            )
        raise TransportError(f"[ERROR] Connection failed: {e}") from e


def api_request(key, token, method, path, params=(), decode=True):
    """Make an authenticated Trello API call.

    Key and token travel as query parameters; the token is omitted when
    empty. Non-2xx answers become BadResponseError carrying the status text.
    """
    url = build_url(path, auth_params(key, token, params))
    try:
        return _http_request(url, method, decode=decode)
    except HTTPError as e:
        raise BadResponseError(e.code, e.reason) from e
