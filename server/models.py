from typing import Any, List, Optional
from pydantic import BaseModel, field_validator

# ---------- Shared schemas ----------

class PanelRequest(BaseModel):
    panel_number: int
    prompt: str
    aspect_ratio: str

class PanelImage(BaseModel):
    # mime_type is passed through as the model reported it, even if absent
    mime_type: Optional[str] = None
    data: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type or ''};base64,{self.data}"

# ---------- Request / response payloads ----------

class StoryRequest(BaseModel):
    story: Any

    @field_validator("story")
    @classmethod
    def story_must_be_text(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("story must be a non-empty string")
        return value

class StoryboardResponse(BaseModel):
    imageUrls: List[str]
