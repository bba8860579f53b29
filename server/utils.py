import base64
import re
from typing import Any, Optional, Tuple

from models import PanelImage

PANEL_COUNT = 4
ASPECT_RATIO = "16:9"
ART_STYLE = "Cyberpunk Neon City at Night with Rain"
DEFAULT_DOWNLOAD_MIME = "image/png"

DATA_URI_RE = re.compile(r"^data:([^;,]*);base64,(.*)$", re.DOTALL)


def build_panel_prompt(story: str, panel_number: int) -> str:
    """
    Render the prompt for one panel of the storyboard.

    Every panel gets the same role, style and consistency directives and the
    full story verbatim; only the panel number changes between the four
    prompts, so each call can infer the sequence on its own.
    """
    return (
        "As a Storyboard Artist Bot, visualize the following narrative.\n"
        f'Artistic Style: Your artistic style must be strictly "{ART_STYLE}".\n'
        "Visual Consistency: It is CRITICAL to ensure the main character and "
        f"environment maintain high visual consistency across all {PANEL_COUNT} panels.\n"
        "\n"
        f'Full Story: "{story}"\n'
        "\n"
        f"Your Task: Generate ONLY the image for Panel {panel_number} of a "
        f"{PANEL_COUNT}-panel storyboard sequence based on the story."
    )


def _field(obj: Any, *names: str) -> Any:
    # SDK objects expose snake_case attributes; raw JSON payloads may use either casing
    if obj is None:
        return None
    for name in names:
        if isinstance(obj, dict):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
        if value is not None:
            return value
    return None


def extract_image(response: Any) -> Optional[PanelImage]:
    """Return the first inline image of the first candidate, or None."""
    candidates = _field(response, "candidates")
    if not isinstance(candidates, (list, tuple)) or not candidates:
        return None

    content = _field(candidates[0], "content")
    parts = _field(content, "parts")
    if not isinstance(parts, (list, tuple)):
        return None

    for part in parts:
        inline_data = _field(part, "inline_data", "inlineData")
        data = _field(inline_data, "data")
        if not data:
            continue
        if isinstance(data, (bytes, bytearray)):
            encoded = base64.b64encode(bytes(data)).decode("ascii")
        elif isinstance(data, str):
            encoded = data
        else:
            continue
        mime_type = _field(inline_data, "mime_type", "mimeType")
        return PanelImage(
            mime_type=mime_type if isinstance(mime_type, str) else None,
            data=encoded,
        )
    return None


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URI into (mime_type, payload bytes).

    A missing or non-image MIME type falls back to image/png, which is what a
    browser download of the panel would assume.
    """
    m = DATA_URI_RE.match(uri.strip())
    if not m:
        raise ValueError("Not a base64 data URI")
    mime_type = m.group(1).strip()
    if not mime_type.startswith("image/"):
        mime_type = DEFAULT_DOWNLOAD_MIME
    return mime_type, base64.b64decode(m.group(2))


def panel_filename(panel_number: int, mime_type: str) -> str:
    """Download name for a panel, e.g. storyboard-panel-1.png."""
    extension = mime_type.split("/", 1)[-1].split("+", 1)[0] or "png"
    extension = re.sub(r"[^a-z0-9]+", "", extension.lower()) or "png"
    return f"storyboard-panel-{panel_number}.{extension}"
