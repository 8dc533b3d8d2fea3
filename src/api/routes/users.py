"""User account routes.

Handlers are plain ``def`` so FastAPI runs them on its threadpool: bcrypt
and pymongo block, and independent requests must not wait on each other.
Domain errors raised by AccountService are turned into ``{"error": ...}``
bodies by the handlers registered in api.main.
"""

import logging
from fastapi import APIRouter, Depends, status

from api.dependencies import get_account_service
from api.models import (
    AuthResponse,
    ChangePasswordRequest,
    ErrorResponse,
    SignInRequest,
    SignUpRequest,
    SuccessResponse,
    UpdateUserRequest,
    UserResponse,
)
from api.security import get_current_user_required
from domain.model.errors import NotFoundError
from domain.model.user import User
from services.account_service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


@router.post(
    "/sign-up",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
def sign_up(request: SignUpRequest, service: AccountService = Depends(get_account_service)):
    """Register a new user with email and password."""
    user = service.create_account(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )
    return UserResponse.from_domain(user)


@router.post(
    "/sign-in",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse}, **_NOT_FOUND},
)
def sign_in(request: SignInRequest, service: AccountService = Depends(get_account_service)):
    """Authenticate a user and receive a JWT token."""
    result = service.authenticate(request.email, request.password)
    return AuthResponse(user=UserResponse(**result["user"]), token=result["token"])


@router.get("", response_model=list[UserResponse])
def list_users(service: AccountService = Depends(get_account_service)):
    """Retrieve a list of all users."""
    return [UserResponse.from_domain(u) for u in service.find_all()]


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user_required)):
    """Get the user identified by the bearer token."""
    return UserResponse.from_domain(current_user)


@router.get("/by-email/{email}", response_model=UserResponse, responses=_NOT_FOUND)
def get_user_by_email(email: str, service: AccountService = Depends(get_account_service)):
    return UserResponse.from_domain(service.find_by_email(email))


@router.get("/{user_id}", response_model=UserResponse, responses=_NOT_FOUND)
def get_user(user_id: str, service: AccountService = Depends(get_account_service)):
    return UserResponse.from_domain(service.find_by_id(user_id))


@router.put("/{user_id}", response_model=UserResponse, responses=_NOT_FOUND)
def update_user(
    user_id: str,
    request: UpdateUserRequest,
    service: AccountService = Depends(get_account_service),
):
    """Update a user's profile. Only the supplied fields change."""
    user = service.update_profile(user_id, request.model_dump(exclude_unset=True))
    return UserResponse.from_domain(user)


@router.put("/{user_id}/change-password", response_model=SuccessResponse, responses=_NOT_FOUND)
def change_password(
    user_id: str,
    request: ChangePasswordRequest,
    service: AccountService = Depends(get_account_service),
):
    if not service.change_password(user_id, request.password):
        raise NotFoundError()
    return SuccessResponse()


@router.delete("/{user_id}", response_model=SuccessResponse, responses=_NOT_FOUND)
def delete_user(user_id: str, service: AccountService = Depends(get_account_service)):
    if not service.delete_account(user_id):
        raise NotFoundError()
    logger.info("User deleted via API", extra={"userId": user_id})
    return SuccessResponse()
