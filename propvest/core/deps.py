# propvest/core/deps.py
from fastapi import Depends, Request

from propvest.core.config import Settings
from propvest.core.exceptions import Forbidden, Unauthenticated
from propvest.models import User
from propvest.storage import Storage

SESSION_USER_KEY = "user_id"


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    request: Request,
    storage: Storage = Depends(get_storage),
) -> User:
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise Unauthenticated()

    user = storage.get_user(user_id)
    if not user:
        request.session.clear()
        raise Unauthenticated()

    return user


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise Forbidden("Admin access required")
    return current_user


def client_ip(request: Request):
    return request.client.host if request.client else None
