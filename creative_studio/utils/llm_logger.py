"""
Debug log for generation calls.

Levels come from ``LLM_DEBUG_LEVEL`` (NONE, INFO, DEBUG, TRACE). Output goes to
the console and, unless ``LLM_LOG_TO_FILE=false``, to
``<LLM_LOG_DIR>/logs/llm_calls.jsonl``. Credentials never reach either.
"""

import json
import os
import time
import uuid
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv


REDACTED_KEYS = {"api_key", "credential", "authorization"}


class LogLevel(Enum):
    """Logging levels for generation call output."""

    NONE = 0
    INFO = 1
    DEBUG = 2
    TRACE = 3


def _preview(text: str, max_len: int = 200) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len] + f"... [+{len(text) - max_len} chars]"


def _redact(metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        key: ("***" if key.lower() in REDACTED_KEYS else value)
        for key, value in (metadata or {}).items()
    }


def token_usage(response: Any) -> Dict[str, Optional[int]]:
    """Token counts reported on a chat model response, if any."""
    usage = getattr(response, "usage_metadata", None)
    if not usage:
        return {}
    return {
        "prompt_tokens": usage.get("input_tokens"),
        "completion_tokens": usage.get("output_tokens"),
        "total_tokens": usage.get("total_tokens"),
    }


class LLMLogger:
    """Process-wide logger for generation calls."""

    _instance: Optional["LLMLogger"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        load_dotenv()

        level_str = os.getenv("LLM_DEBUG_LEVEL", "NONE").upper()
        self.level = LogLevel.__members__.get(level_str, LogLevel.NONE)
        self.log_to_file = os.getenv("LLM_LOG_TO_FILE", "true").lower() == "true"
        self.log_dir = Path(os.getenv("LLM_LOG_DIR", "outputs"))

        self._initialized = True

    @property
    def log_file(self) -> Path:
        return self.log_dir / "logs" / "llm_calls.jsonl"

    def enabled(self, level: LogLevel = LogLevel.INFO) -> bool:
        return self.level.value >= level.value

    def _emit(self, entry: Dict[str, Any]):
        if not self.log_to_file:
            return
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False, default=str) + "\n")

    def _entry(self, event: str, call_id: str, **fields) -> Dict[str, Any]:
        entry = {
            "timestamp": datetime.now().isoformat(),
            "event": event,
            "level": self.level.name,
            "call_id": call_id,
        }
        entry.update(fields)
        return entry

    def start_call(self, component: str, provider: str, model: str) -> str:
        """
        Announce a generation call.

        Returns:
            Call ID used to tie request and response together, or an empty
            string when logging is off.
        """
        if not self.enabled():
            return ""
        call_id = uuid.uuid4().hex[:12]
        print(f"[{datetime.now().isoformat()}] 🔵 Generation call {call_id}: "
              f"[{component}] {provider}/{model}")
        return call_id

    def log_request(
        self,
        call_id: str,
        component: str,
        messages: List[Any],
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """Record the prompt sent to the model (DEBUG and up)."""
        if not self.enabled(LogLevel.DEBUG):
            return

        prompts = [str(getattr(msg, "content", msg)) for msg in messages]
        for prompt in prompts:
            shown = prompt if self.level == LogLevel.TRACE else _preview(prompt, 150)
            print(f"  Prompt: {shown}")

        self._emit(self._entry(
            "request",
            call_id,
            component=component,
            prompt_chars=sum(len(p) for p in prompts),
            prompts=prompts if self.level == LogLevel.TRACE else None,
            metadata=_redact(metadata),
        ))

    def log_response(self, call_id: str, component: str, response: Any, latency_ms: float):
        """Record latency, token usage and (at DEBUG and up) the returned code."""
        if not self.enabled():
            return

        content = getattr(response, "content", response)
        content = content if isinstance(content, str) else json.dumps(content, default=str)
        usage = token_usage(response)

        line = f"[{datetime.now().isoformat()}] ✅ Generation {call_id}: {latency_ms:.1f}ms"
        if usage.get("total_tokens") is not None:
            line += f" | {usage['total_tokens']} tokens"
        print(line)
        if self.enabled(LogLevel.DEBUG):
            shown = content if self.level == LogLevel.TRACE else _preview(content)
            print(f"  Code: {shown}")

        self._emit(self._entry(
            "response",
            call_id,
            component=component,
            latency_ms=round(latency_ms, 1),
            code_chars=len(content),
            code=content if self.level == LogLevel.TRACE else None,
            usage=usage or None,
        ))

    def log_error(self, component: str, error: BaseException, call_id: str = ""):
        """Diagnostic for a failed call. Always printed; written to file when enabled."""
        status_code = getattr(error, "status_code", None)
        detail = f"{type(error).__name__}: {error}"
        if status_code is not None:
            detail = f"HTTP {status_code} | {detail}"
        print(f"[{datetime.now().isoformat()}] ❌ Generation failed: [{component}] {detail}")

        if self.enabled():
            self._emit(self._entry(
                "error",
                call_id,
                component=component,
                error_type=type(error).__name__,
                status_code=status_code,
            ))


def get_logger() -> LLMLogger:
    """Get the shared logger instance."""
    return LLMLogger()


class LoggedLLM:
    """Chat model wrapper that logs each ``invoke`` call."""

    def __init__(
        self,
        llm_instance: Any,
        component: str,
        provider: str,
        model: str,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.llm = llm_instance
        self.component = component
        self.provider = provider
        self.model = model
        self.metadata = metadata or {}
        self.logger = get_logger()
        self.last_call_id = ""

    def __getattr__(self, name: str):
        return getattr(self.llm, name)

    def invoke(self, messages: List[Any], **kwargs) -> Any:
        call_id = self.logger.start_call(self.component, self.provider, self.model)
        self.last_call_id = call_id
        if not call_id:
            return self.llm.invoke(messages, **kwargs)

        self.logger.log_request(call_id, self.component, messages, self.metadata)
        start = time.perf_counter()
        # Failures propagate; the caller records them with log_error().
        response = self.llm.invoke(messages, **kwargs)
        self.logger.log_response(
            call_id,
            self.component,
            response,
            latency_ms=(time.perf_counter() - start) * 1000,
        )
        return response
