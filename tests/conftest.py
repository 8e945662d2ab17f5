"""
Shared fixtures for MaestroWarmup tests.

FakeGenaiClient stands in for google.genai.Client: it records every
generate_content call and replays canned responses in order.
"""

import base64
from types import SimpleNamespace

import numpy as np
import pytest

from maestrowarmup.ai import GeminiClient


class FakeModels:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if not self.responses:
            raise AssertionError("Unexpected generate_content call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeGenaiClient:
    def __init__(self, *responses):
        self.aio = SimpleNamespace(models=FakeModels(responses))

    @property
    def calls(self):
        return self.aio.models.calls


def text_response(text):
    return SimpleNamespace(text=text, candidates=[])


def audio_response(data):
    part = SimpleNamespace(
        text=None,
        inline_data=SimpleNamespace(data=data, mime_type="audio/L16;codec=pcm;rate=24000"),
    )
    return SimpleNamespace(
        text=None,
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))],
    )


def pcm_base64(*samples):
    return base64.b64encode(np.array(samples, dtype="<i2").tobytes()).decode("ascii")


@pytest.fixture
def make_client():
    """Build a GeminiClient backed by a FakeGenaiClient with canned responses."""
    def _make(*responses):
        fake = FakeGenaiClient(*responses)
        return GeminiClient(client=fake), fake
    return _make
