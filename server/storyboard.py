"""
Fan a story out into four panel requests against the Gemini image model.

The client is passed in by the caller; it only needs the async surface of
``google.genai.Client`` (``client.aio.models.generate_content``). All four
requests run concurrently and the batch is all-or-nothing: a single failed
panel discards the others.
"""
import asyncio
import logging
import os
from typing import Any, List, Optional

import httpx
from google.genai import errors as genai_errors
from google.genai import types

from errors import ExtractionError, TransportError, ValidationError
from models import PanelImage, PanelRequest
from utils import ASPECT_RATIO, PANEL_COUNT, build_panel_prompt, extract_image

log = logging.getLogger("uvicorn.error")

DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"

PANEL_FAILURE_MESSAGE = (
    "Failed to generate one or more storyboard panels. The model did not return an image."
)


def image_model() -> str:
    return os.getenv("GEMINI_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL


def build_panel_requests(story: str) -> List[PanelRequest]:
    if not isinstance(story, str) or not story.strip():
        raise ValidationError("Story cannot be empty.")
    return [
        PanelRequest(
            panel_number=n,
            prompt=build_panel_prompt(story, n),
            aspect_ratio=ASPECT_RATIO,
        )
        for n in range(1, PANEL_COUNT + 1)
    ]


async def _request_panel(client: Any, panel: PanelRequest, model: str):
    return await client.aio.models.generate_content(
        model=model,
        contents=panel.prompt,
        config=types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=panel.aspect_ratio),
        ),
    )


async def generate_panel_images(client: Any, story: str, model: Optional[str] = None) -> List[PanelImage]:
    panels = build_panel_requests(story)
    model = model or image_model()
    log.info("Requesting %d storyboard panels from %s", len(panels), model)

    try:
        # gather keeps input order, so index i is always panel i + 1
        responses = await asyncio.gather(
            *(_request_panel(client, panel, model) for panel in panels)
        )
    except genai_errors.APIError as e:
        log.exception("Gemini API error during panel generation")
        raise TransportError(f"Upstream model error: {e}") from e
    except httpx.HTTPError as e:
        log.exception("Network error to Gemini during panel generation")
        raise TransportError(f"Network error: {e}") from e

    images: List[PanelImage] = []
    for panel, response in zip(panels, responses):
        image = extract_image(response)
        if image is None:
            log.warning("Panel %d response contained no inline image", panel.panel_number)
            raise ExtractionError(PANEL_FAILURE_MESSAGE)
        images.append(image)
    return images


async def generate_panels(client: Any, story: str, model: Optional[str] = None) -> List[str]:
    """Generate the four panels for ``story`` and return them as data URIs."""
    images = await generate_panel_images(client, story, model=model)
    return [image.data_uri for image in images]
