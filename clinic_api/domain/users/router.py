"""User router - profile of the authenticated account"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...auth import get_current_user
from ...models import User
from ...shared.responses import Envelope, success

router = APIRouter(prefix="/users", tags=["Users"])


class UserProfile(BaseModel):
    id: int
    name: str
    email: str
    role: str
    profilePicture: Optional[str] = None
    createdAt: Optional[datetime] = None


@router.get("/me", response_model=Envelope[UserProfile])
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile"""
    return success(
        UserProfile(
            id=current_user.id,
            name=current_user.name,
            email=current_user.email,
            role=current_user.role,
            profilePicture=current_user.profile_picture,
            createdAt=current_user.created_at,
        )
    )
