# propvest/routes/auth.py
import logging

from fastapi import APIRouter, Depends, Request, status

from propvest.core.deps import SESSION_USER_KEY, get_current_user, get_storage
from propvest.core.exceptions import Unauthenticated, ValidationError
from propvest.core.security import get_password_hash, verify_password
from propvest.models import User
from propvest.schemas.user import UserCreate, UserLogin, UserResponse
from propvest.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,
    request: Request,
    storage: Storage = Depends(get_storage),
):
    if storage.get_user_by_username(user_data.username):
        raise ValidationError("Username already exists")

    data = user_data.model_dump()
    data["password"] = get_password_hash(user_data.password)
    user = storage.create_user(data)

    request.session[SESSION_USER_KEY] = user.id
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user

@router.post("/login", response_model=UserResponse)
def login(
    credentials: UserLogin,
    request: Request,
    storage: Storage = Depends(get_storage),
):
    user = storage.get_user_by_username(credentials.username)

    if not user or not verify_password(credentials.password, user.password):
        logger.warning("Failed login attempt for %r", credentials.username)
        raise Unauthenticated("Invalid username or password")

    user = storage.update_last_login(user.id)
    request.session[SESSION_USER_KEY] = user.id
    logger.info("User %s logged in", user.username)
    return user

@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out successfully"}

@router.get("/user", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    return current_user
