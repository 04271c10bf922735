"""
FitTrack API - User Authentication Routes.

Registration, login and profile endpoints. Both register and login answer
with ``{"access": <jwt>}``; the token is the only credential the workout
routes accept.
"""

import logging

from beanie import PydanticObjectId
from fastapi import APIRouter, Depends, status
from pymongo.errors import DuplicateKeyError

from fittrack.dependencies import get_current_user_id
from fittrack.models.mongodb import UserDocument
from fittrack.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    UserDetailsResponse,
)
from fittrack.services.auth import (
    hash_password,
    verify_password,
    create_access_token,
)
from fittrack.utils.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundOrForbiddenError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest) -> TokenResponse:
    """
    Register a new user with email and password.

    Args:
        request: RegisterRequest with email and password.

    Returns:
        TokenResponse with an access token for the new user.

    Raises:
        ConflictError: 409 if the email is already registered.
    """
    email = _normalize_email(request.email)

    existing = await UserDocument.find_one(UserDocument.email == email)
    if existing:
        raise ConflictError("Email already registered")

    user = UserDocument(
        email=email,
        password_hash=hash_password(request.password),
    )
    try:
        await user.insert()
    except DuplicateKeyError:
        # lost a race with a concurrent registration for the same email
        raise ConflictError("Email already registered")
    logger.info(f"Registered user {user.id}")

    return TokenResponse(access=create_access_token(str(user.id)))


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest) -> TokenResponse:
    """
    Login user with email and password.

    Raises:
        AuthenticationError: 401 if credentials are invalid.
    """
    user = await UserDocument.find_one(UserDocument.email == _normalize_email(request.email))

    if not user or not verify_password(request.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    return TokenResponse(access=create_access_token(str(user.id)))


@router.get("/details", response_model=UserDetailsResponse)
async def get_details(user_id: str = Depends(get_current_user_id)) -> UserDetailsResponse:
    """Return the authenticated user's profile."""
    user = None
    if PydanticObjectId.is_valid(user_id):
        user = await UserDocument.get(PydanticObjectId(user_id))

    if not user:
        raise NotFoundOrForbiddenError("User not found")

    return UserDetailsResponse(id=str(user.id), email=user.email)
