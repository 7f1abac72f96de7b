"""Voice assistant endpoints."""

from fastapi import APIRouter, Depends, status

from dentwise.config import settings
from dentwise.core.exceptions import ServiceUnavailableException
from dentwise.dependencies import get_current_external_id
from dentwise.schemas.voice import VoiceConfigResponse

router = APIRouter(prefix="/voice", tags=["Voice"])


@router.get(
    "/config",
    response_model=VoiceConfigResponse,
    status_code=status.HTTP_200_OK,
    summary="Voice assistant configuration",
    dependencies=[Depends(get_current_external_id)],
)
async def get_voice_config() -> VoiceConfigResponse:
    """
    Assistant id the browser passes to the voice SDK when starting a call.

    Raises:
        ServiceUnavailableException: If no assistant is configured
    """
    if not settings.vapi_assistant_id:
        raise ServiceUnavailableException("Voice assistant is not configured")

    return VoiceConfigResponse(assistant_id=settings.vapi_assistant_id)
