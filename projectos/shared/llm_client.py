"""
HTTP client for OpenAI-compatible chat completion providers.

One call, one completion: no streaming, no retries. Transport and HTTP
failures surface as `requests` exceptions; a payload without a text reply
raises ValueError. Set DEBUG_PROMPTS=true to dump each exchange, with
credentials masked, under logs/debug/.
"""

import json
import os
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from .logger import get_logger

logger = get_logger("llm_client", __name__)

DEBUG_DIR = Path("logs") / "debug"
REDACTED = "[REDACTED]"

# Substrings marking a key whose value must not reach a debug dump
SECRET_MARKERS = ("api_key", "apikey", "authorization", "password", "token", "secret", "credential")


def redact_secrets(value: Any) -> Any:
    """Return a copy of `value` with secret-looking keys masked at any depth."""
    if isinstance(value, dict):
        return {
            key: REDACTED if any(m in str(key).lower() for m in SECRET_MARKERS) else redact_secrets(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact_secrets(item) for item in value]
    return value


def _debug_enabled() -> bool:
    return os.getenv("DEBUG_PROMPTS", "false").strip().lower() == "true"


def _dump_debug(url: str, request_data: Dict[str, Any], response_data: Optional[Any] = None) -> None:
    """Write one exchange to logs/debug/req_<timestamp>_<id>.json when enabled."""
    if not _debug_enabled():
        return

    now = datetime.now()
    target = DEBUG_DIR / f"req_{now:%Y%m%d_%H%M%S}_{uuid.uuid4().hex[:8]}.json"
    entry: Dict[str, Any] = {
        "url": url,
        "timestamp": now.isoformat(),
        "request": redact_secrets(request_data),
    }
    if response_data is not None:
        entry["response"] = response_data

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(entry, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not write debug dump {target}: {e}")


def completions_url(base_url: str) -> str:
    """Chat completions endpoint for a base URL given with or without /v1."""
    base = base_url.rstrip("/")
    if not base.endswith("/v1"):
        base += "/v1"
    return base + "/chat/completions"


def extract_content(response_data: Any) -> str:
    """Text of the first choice in a completion payload.

    Raises:
        ValueError: If the payload has no textual first choice.
    """
    if not isinstance(response_data, dict):
        raise ValueError("Malformed completion payload: expected a JSON object")
    try:
        content = response_data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"Malformed completion payload: missing {e}") from e
    if not isinstance(content, str):
        raise ValueError("Malformed completion payload: content is not text")
    return content


def chat_completion(
    *,
    base_url: str,
    model: str,
    messages: List[Dict[str, str]],
    api_key: Optional[str] = None,
    timeout: float = 60,
    request_params: Optional[Dict[str, Any]] = None,
) -> str:
    """Send the conversation and return the provider's reply text.

    Args:
        base_url: Provider base URL, e.g. "https://api.openai.com/v1".
        model: Model identifier.
        messages: Role-tagged turns, oldest first.
        api_key: Bearer credential, if the provider needs one.
        timeout: Seconds to wait for the provider.
        request_params: Extra body fields such as temperature.

    Raises:
        requests.Timeout: The provider did not answer within `timeout`.
        requests.RequestException: Connection or HTTP status failure.
        ValueError: The response body is not a usable completion.
    """
    url = completions_url(base_url)
    body: Dict[str, Any] = {"model": model, "messages": messages, **(request_params or {})}
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    debug_request = {"payload": body, "headers": headers}
    _dump_debug(url, debug_request)

    started = time.monotonic()
    try:
        response = requests.post(url, json=body, headers=headers, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        failed = getattr(e, "response", None)
        if failed is not None:
            _dump_debug(url, debug_request, {"status_code": failed.status_code, "error": failed.text})
        logger.error(
            f"Completion request to {url} failed",
            extra={"payload": {"error": str(e), "model": model}},
        )
        raise

    elapsed_ms = round((time.monotonic() - started) * 1000, 1)
    _dump_debug(url, debug_request, data)
    logger.info("Completion received", extra={"payload": {"model": model, "duration_ms": elapsed_ms}})
    return extract_content(data)
