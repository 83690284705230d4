from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shiptrack.core.logging import get_logger
from shiptrack.schemas.users import (
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserResponse,
)
from shiptrack.services.auth_service import (
    AccountExistsError,
    AuthService,
    InvalidCredentialsError,
    SessionMissingError,
    UserNotFoundError,
)
from shiptrack.services.session_service import (
    SessionContext,
    clear_session_cookie,
    current_session,
    set_session_cookie,
)

router = APIRouter(prefix="/users", tags=["users"])
auth_service = AuthService()
logger = get_logger(__name__)


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


@router.post("/signup", response_model=UserResponse)
def signup(payload: SignupRequest, response: Response):
    try:
        result = auth_service.signup(
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
            avatar=payload.avatar,
        )
    except AccountExistsError as exc:
        return _message(409, exc.message)
    except SQLAlchemyError:
        logger.exception("Signup failed")
        return _message(500, "Error creating user")
    set_session_cookie(response, result.session_token)
    return UserResponse(**result.user)


@router.post("/login", response_model=UserResponse)
def login(payload: LoginRequest, response: Response):
    try:
        result = auth_service.login(payload.email, payload.password)
    except UserNotFoundError as exc:
        return _message(404, exc.message)
    except InvalidCredentialsError as exc:
        return _message(401, exc.message)
    except SQLAlchemyError:
        logger.exception("Login failed")
        return _message(500, "Error logging in")
    set_session_cookie(response, result.session_token)
    return UserResponse(**result.user)


@router.post("/profile", response_model=UserResponse)
def profile(context: Optional[SessionContext] = Depends(current_session)):
    try:
        user = auth_service.profile(context)
    except SessionMissingError:
        return Response(status_code=404)
    return UserResponse(**user)


@router.post("/logout")
def logout(context: Optional[SessionContext] = Depends(current_session)):
    try:
        auth_service.logout(context)
    except SQLAlchemyError:
        logger.exception("Session cleanup failed during logout")
    response = Response(status_code=200)
    clear_session_cookie(response)
    return response


@router.put("/changePassword", response_model=MessageResponse)
def change_password(payload: ChangePasswordRequest, context: Optional[SessionContext] = Depends(current_session)):
    try:
        auth_service.change_password(context, payload.old_password, payload.new_password)
    except (SessionMissingError, UserNotFoundError):
        return Response(status_code=404)
    except InvalidCredentialsError as exc:
        return _message(401, exc.message)
    except SQLAlchemyError:
        logger.exception("Password change failed")
        return _message(500, "Error changing password")
    return MessageResponse(message="Password updated successfully")
