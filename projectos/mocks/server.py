"""
Mock completion provider for ProjectOS.

Provides a FastAPI server that mimics the OpenAI-compatible chat completions API
so the assistant can be exercised without a real provider.

Usage:
    python -m projectos.mocks.server
    # then point LLM_BASE_URL at http://localhost:9000/v1
"""

import json
import re
import time
import uuid
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..shared.config import MOCK_LLM_PORT
from ..shared.logger import get_logger

logger = get_logger("mock_llm", __name__)

app = FastAPI(title="Mock Completion Provider", version="1.0.0")

_CREATE_RE = re.compile(r"\b(create|new|start)\b", re.IGNORECASE)
_FILLER_WORDS = {"a", "an", "the", "please", "create", "new", "start", "project", "for", "me"}


def _last_user_message(messages: List[Dict[str, Any]]) -> str:
    for msg in reversed(messages):
        if isinstance(msg, dict) and msg.get("role") == "user":
            return str(msg.get("content", ""))
    return ""


def _project_name(message: str) -> Optional[str]:
    """Pick the words naming the project out of a creation request."""
    words = [w for w in re.findall(r"[A-Za-z0-9]+", message.lower()) if w not in _FILLER_WORDS]
    return " ".join(words) if words else None


def build_create_reply(message: str, today: date) -> str:
    """Answer a creation request with a fenced JSON creation command."""
    name = _project_name(message) or "untitled"
    slug = "-".join(name.split())
    title = f"{name.title()} Project"
    content = (
        "---\n"
        f"title: {title}\n"
        "status: not_started\n"
        f"startDate: {today.isoformat()}\n"
        f"endDate: {(today + timedelta(days=90)).isoformat()}\n"
        "---\n"
        "# Description\n"
        "To be completed"
    )
    command = {"action": "create", "filename": f"{slug}-project.md", "content": content}
    return f"Here is the new project:\n```json\n{json.dumps(command, ensure_ascii=False, indent=2)}\n```"


def build_reply(messages: List[Dict[str, Any]], today: Optional[date] = None) -> str:
    """Detect the scenario from the last user message and build the reply text."""
    message = _last_user_message(messages)
    if _CREATE_RE.search(message):
        return build_create_reply(message, today or date.today())
    return f"Mock assistant reply: {message}" if message else "Mock assistant reply"


def completion_body(model: str, content: str) -> Dict[str, Any]:
    """Wrap reply text in the OpenAI chat.completion response shape."""
    return {
        "id": f"mock-chat-{uuid.uuid4().hex[:12]}",
        "object": "chat.completion",
        "created": int(time.time()),
        "model": model,
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"},
        ],
        "usage": {"prompt_tokens": 0, "completion_tokens": len(content.split()), "total_tokens": len(content.split())},
    }


@app.post("/v1/chat/completions")
async def chat_completions(request: Request) -> JSONResponse:
    """Mock OpenAI-compatible chat completions endpoint.

    Creation requests ("create", "new", "start") get a fenced JSON creation
    command; anything else is echoed back as plain text.
    """
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "Request body must be JSON"}, status_code=400)
    if not isinstance(body, dict) or not isinstance(body.get("messages"), list):
        return JSONResponse({"error": "'messages' must be a list"}, status_code=400)

    content = build_reply(body["messages"])
    logger.info("Mock completion served", extra={"payload": {"chars": len(content)}})
    return JSONResponse(completion_body(body.get("model", "mock-model"), content))


@app.get("/health")
async def health() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "healthy", "service": "mock-llm"})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=MOCK_LLM_PORT)
