"""Voice assistant schemas."""

from pydantic import BaseModel


class VoiceConfigResponse(BaseModel):
    """Configuration the browser needs to start a voice call."""

    assistant_id: str
