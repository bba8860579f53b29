"""
Small client for the storyboard endpoint.

Posts a story, checks that exactly four panel URIs came back, and writes each
panel to disk under the name a browser download would use.
"""
import argparse
import logging
from pathlib import Path
from typing import List, Optional

import httpx

from errors import StoryboardClientError, ValidationError
from utils import PANEL_COUNT, panel_filename, parse_data_uri

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class StoryboardClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, http_client: Optional[httpx.Client] = None):
        self.http = http_client or httpx.Client(base_url=base_url, timeout=300.0, trust_env=False)

    def generate(self, story: str) -> List[str]:
        if not story.strip():
            raise ValidationError("Story cannot be empty.")

        resp = self.http.post("/api/storyboard", json={"story": story})

        try:
            data = resp.json()
        except ValueError:
            data = {"error": "Failed to parse error response."} if resp.is_error else None

        if resp.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise StoryboardClientError(message or f"Request failed with status {resp.status_code}")

        urls = data.get("imageUrls") if isinstance(data, dict) else None
        if not isinstance(urls, list) or len(urls) != PANEL_COUNT:
            raise StoryboardClientError("Invalid response format from the server.")
        return urls

    def close(self):
        self.http.close()


def save_panels(image_urls: List[str], directory) -> List[Path]:
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for idx, uri in enumerate(image_urls):
        mime_type, payload = parse_data_uri(uri)
        path = out_dir / panel_filename(idx + 1, mime_type)
        path.write_bytes(payload)
        paths.append(path)
    return paths


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a 4-panel storyboard from a story.")
    parser.add_argument("story", help="narrative text to illustrate")
    parser.add_argument("--url", default=DEFAULT_BASE_URL, help="storyboard server base URL")
    parser.add_argument("--out", default=".", help="directory to save the panels in")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    client = StoryboardClient(args.url)
    try:
        urls = client.generate(args.story)
    except (StoryboardClientError, ValidationError) as e:
        log.error("Generation failed: %s", e)
        return 1
    finally:
        client.close()

    try:
        paths = save_panels(urls, args.out)
    except ValueError as e:
        log.error("Could not save panels: %s", e)
        return 1

    for path in paths:
        log.info("Saved %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
