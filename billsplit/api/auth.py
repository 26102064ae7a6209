from fastapi import APIRouter, Depends

from billsplit.core.auth import get_current_user
from billsplit.models.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/user")
async def get_auth_user(user: User = Depends(get_current_user)):
    """Current user, refreshed from the token's claims on every call."""
    return {
        "id": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "profile_image_url": user.profile_image_url,
    }
