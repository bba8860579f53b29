import base64

MOCK_PIXEL = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR4nGNgYAAAAAMAAWgmWQ0AAAAASUVORK5CYII="
)


class MockModels:
    """Mimic the subset of the google-genai ``aio.models`` interface we rely on."""

    def __init__(self):
        # Every call is captured so tests can assert on the prompts we would
        # have sent to Gemini without making a network call.
        self.calls = []

    class _InlineData:
        def __init__(self, data: bytes, mime_type: str):
            self.data = data
            self.mime_type = mime_type

    class _Part:
        def __init__(self, text=None, inline_data=None):
            self.text = text
            self.inline_data = inline_data

    class _Content:
        def __init__(self, parts):
            self.parts = parts

    class _Candidate:
        def __init__(self, content):
            self.content = content

    class _Response:
        def __init__(self, prompt: str):
            parts = [
                MockModels._Part(text=f"Mock render for: {prompt[:60]}"),
                MockModels._Part(inline_data=MockModels._InlineData(MOCK_PIXEL, "image/png")),
            ]
            self.candidates = [MockModels._Candidate(MockModels._Content(parts))]

    async def generate_content(self, *, model: str, contents, config=None, **kwargs):  # pylint: disable=unused-argument
        self.calls.append({"model": model, "contents": contents, "config": config})
        return MockModels._Response(str(contents))


class MockGenAI:
    """Return a single 1x1 PNG for each requested panel."""

    def __init__(self):
        self.aio = type("Aio", (), {"models": MockModels()})()
