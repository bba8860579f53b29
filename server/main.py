# server/main.py
from dotenv import load_dotenv
import os
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from google import genai
from starlette.exceptions import HTTPException as StarletteHTTPException

#Load .env
load_dotenv()

from errors import ConfigurationError, GenerationError, ValidationError
from mock_genai import MockGenAI
from models import StoryboardResponse, StoryRequest
from storyboard import generate_panels

log = logging.getLogger("uvicorn.error")

STORY_REQUIRED_MESSAGE = "Story parameter is required and must be a non-empty string."
INTERNAL_ERROR_MESSAGE = "An internal server error occurred."

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
USE_GEMINI_MOCK = os.getenv("GEMINI_USE_MOCK", "0").lower() in {"1", "true", "yes", "on"}


def build_client(api_key: Optional[str] = None, use_mock: bool = False) -> Any:
    """Create the one model client the process shares for its lifetime."""
    if use_mock:
        log.info("GEMINI_USE_MOCK enabled; returning mock images instead of hitting Gemini.")
        return MockGenAI()
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY environment variable not set.")
    return genai.Client(api_key=api_key)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(client: Any) -> FastAPI:
    app = FastAPI()
    app.state.genai_client = client

    # --- CORS (dev) ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Every error leaves as {"error": "..."}, including FastAPI's own 404/405
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        return _error(400, STORY_REQUIRED_MESSAGE)

    # --- Health check ---
    @app.get("/health")
    def health():
        return {"ok": True}

    @app.post("/api/storyboard", response_model=StoryboardResponse)
    async def create_storyboard(req: StoryRequest, request: Request):
        try:
            image_urls = await generate_panels(request.app.state.genai_client, req.story)
        except ValidationError:
            return _error(400, STORY_REQUIRED_MESSAGE)
        except GenerationError as e:
            log.error("Error generating storyboard: %s", e)
            return _error(500, str(e))
        except Exception:
            log.exception("Unhandled server error during storyboard generation")
            return _error(500, INTERNAL_ERROR_MESSAGE)

        return StoryboardResponse(imageUrls=image_urls)

    return app


# --- Gemini client, created once at startup ---
client = build_client(GEMINI_API_KEY, use_mock=USE_GEMINI_MOCK)
app = create_app(client)
