import pytest
from fastapi.testclient import TestClient
from google.genai import errors as genai_errors

import main
from main import STORY_REQUIRED_MESSAGE, build_client, create_app
from errors import ConfigurationError
from mock_genai import MockGenAI
from storyboard import PANEL_FAILURE_MESSAGE

from conftest import FakeClient, image_response, text_response

STORY = "A detective walks through rain."


@pytest.fixture
def api(png_client):
    return TestClient(create_app(png_client))


def test_health(api):
    assert api.get("/health").json() == {"ok": True}


def test_storyboard_success(api, png_client):
    resp = api.post("/api/storyboard", json={"story": STORY})

    assert resp.status_code == 200
    urls = resp.json()["imageUrls"]
    assert len(urls) == 4
    assert all(u.startswith("data:image/png;base64,") for u in urls)
    assert len(png_client.calls) == 4


@pytest.mark.parametrize(
    "body",
    [{}, {"story": ""}, {"story": "   "}, {"story": 42}, {"story": None}, {"story": ["a"]}],
)
def test_bad_story_is_rejected(api, png_client, body):
    resp = api.post("/api/storyboard", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": STORY_REQUIRED_MESSAGE}
    assert png_client.calls == []


def test_non_json_body_is_rejected(api):
    resp = api.post("/api/storyboard", content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": STORY_REQUIRED_MESSAGE}


def test_wrong_method(api):
    resp = api.get("/api/storyboard")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method Not Allowed"}


def test_imageless_panel_returns_500():
    client = FakeClient(lambda n: text_response() if n == 4 else image_response())
    resp = TestClient(create_app(client)).post("/api/storyboard", json={"story": STORY})

    assert resp.status_code == 500
    body = resp.json()
    assert body == {"error": PANEL_FAILURE_MESSAGE}
    assert "imageUrls" not in body


def test_unexpected_error_returns_generic_500():
    client = FakeClient(lambda n: RuntimeError("kaboom"))
    resp = TestClient(create_app(client)).post("/api/storyboard", json={"story": STORY})

    assert resp.status_code == 500
    assert resp.json() == {"error": "An internal server error occurred."}


def test_missing_credential_is_fatal():
    with pytest.raises(ConfigurationError):
        build_client(None, use_mock=False)


def test_module_app_uses_mock_client_when_enabled():
    assert isinstance(main.client, MockGenAI)
    resp = TestClient(main.app).post("/api/storyboard", json={"story": STORY})
    assert resp.status_code == 200
    assert len(resp.json()["imageUrls"]) == 4


def test_gemini_api_error_returns_500():
    client = FakeClient(
        lambda n: genai_errors.APIError(503, {"error": {"message": "overloaded"}}) if n == 2 else image_response()
    )
    resp = TestClient(create_app(client)).post("/api/storyboard", json={"story": STORY})

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"].startswith("Upstream model error:")
    assert "imageUrls" not in body
