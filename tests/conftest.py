import base64
import os
import re

import pytest

# main builds its client at import time; never let the suite reach Gemini
os.environ["GEMINI_USE_MOCK"] = "1"

PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGNgYAAAAAMAAWgmWQ0AAAAASUVORK5CYII="
)

PANEL_RE = re.compile(r"Generate ONLY the image for Panel (\d+)")


def image_response(data=PNG_BYTES, mime_type="image/png"):
    return {"candidates": [{"content": {"parts": [{"inline_data": {"data": data, "mime_type": mime_type}}]}}]}


def text_response(text="I cannot draw that."):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeModels:
    """Answer each panel with whatever ``responder(panel_number)`` returns."""

    def __init__(self, responder):
        self.responder = responder
        self.calls = []

    async def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        panel_number = int(PANEL_RE.search(contents).group(1))
        result = self.responder(panel_number)
        if isinstance(result, Exception):
            raise result
        return result


class FakeClient:
    def __init__(self, responder):
        self.aio = type("Aio", (), {"models": FakeModels(responder)})()

    @property
    def calls(self):
        return self.aio.models.calls


@pytest.fixture
def png_client():
    # each panel gets a distinguishable payload so ordering can be checked
    return FakeClient(lambda n: image_response(data=PNG_BYTES + bytes([n])))
