"""User endpoints."""

from fastapi import APIRouter

from dentwise.dependencies import CurrentExternalId, DatabaseSession, UserServiceDep
from dentwise.schemas.users import UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/sync", response_model=UserResponse)
async def sync_current_user(
    external_id: CurrentExternalId,
    user_service: UserServiceDep,
    db: DatabaseSession,
):
    """Create or refresh the caller's local record from the identity provider."""
    user = await user_service.ensure_user(db, external_id)
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(
    external_id: CurrentExternalId,
    user_service: UserServiceDep,
    db: DatabaseSession,
):
    """Get current user's profile, syncing it first."""
    user = await user_service.get_current_db_user(db, external_id)
    return UserResponse.model_validate(user)
