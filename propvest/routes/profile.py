# propvest/routes/profile.py
from fastapi import APIRouter, Depends

from propvest.core.deps import get_current_user, get_storage
from propvest.models import User
from propvest.schemas.user import UserProfileUpdate, UserResponse
from propvest.storage import Storage

router = APIRouter()

@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user

@router.patch("/profile", response_model=UserResponse)
def update_profile(
    profile_data: UserProfileUpdate,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.update_user_profile(
        current_user.id, profile_data.model_dump(exclude_unset=True)
    )
