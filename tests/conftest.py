"""
Shared fixtures for studio tests.

HTTP traffic is simulated with ``httpx.MockTransport`` injected into the
generation client, so no test touches the network.
"""

import json
import threading

import httpx
import pytest

from creative_studio.io.store import StudioStore
from creative_studio.models import MODEL_ID, GeneratedCode, GenerationFailure, GenerationSuccess
from creative_studio.orchestration.controller import StudioController
from creative_studio.pipeline.generation import GenerationClient
from creative_studio.rendering.preview import PreviewRenderer


TEST_API_BASE = "https://api.test.local/openai/v1"


def completion_payload(content):
    """Chat-completion response body carrying ``content``."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": MODEL_ID,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
                "logprobs": None,
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17},
    }


class RecordingTransport:
    """Mock transport handler that records requests and replays a canned response."""

    def __init__(self, status_code=200, payload=None, error=None):
        self.status_code = status_code
        self.payload = payload
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)

    def body(self, index=0):
        return json.loads(self.requests[index].content)


def make_client(transport: RecordingTransport) -> GenerationClient:
    return GenerationClient(
        api_base=TEST_API_BASE,
        http_client=httpx.Client(transport=httpx.MockTransport(transport)),
    )


class FakeClient:
    """Generation client double returning queued results."""

    model_name = MODEL_ID

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def generate(self, prompt_text, credential):
        self.calls.append((prompt_text, credential))
        return self.results.pop(0)


class BlockingClient(FakeClient):
    """Fake client that holds the request open until released."""

    def __init__(self, *results):
        super().__init__(*results)
        self.started = threading.Event()
        self.release = threading.Event()

    def generate(self, prompt_text, credential):
        self.started.set()
        self.release.wait(timeout=5)
        return super().generate(prompt_text, credential)


def success(code):
    return GenerationSuccess(generated=GeneratedCode(code=code))


def failure(status_code=401):
    return GenerationFailure(message=f"API Error: {status_code}", status_code=status_code)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "store.json"


@pytest.fixture
def store(store_path):
    # Long window: writes only happen on flush() unless a test says otherwise.
    return StudioStore.at(store_path, debounce_seconds=30)


@pytest.fixture
def renderer(tmp_path):
    renderer = PreviewRenderer(tmp_path / "previews")
    yield renderer
    renderer.clear()


@pytest.fixture
def make_controller(store, renderer):
    """Factory building a controller around the given client."""

    def _make(client, credential="sk-test", prompt=""):
        controller = StudioController(store=store, client=client, renderer=renderer)
        controller.state.credential = credential
        controller.state.prompt_text = prompt
        return controller

    return _make
