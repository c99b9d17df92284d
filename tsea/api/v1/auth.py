"""
Authentication endpoints.
"""

from fastapi import APIRouter, HTTPException, status

from tsea.api.deps import CurrentUser, DbSession, Sessions
from tsea.kernel.identity.identity_service import IdentityService
from tsea.kernel.sessions.store import progress_session_key
from tsea.schemas.auth import TokenResponse, UserCreate, UserLogin, UserResponse
from tsea.schemas.common import SuccessResponse

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(data: UserCreate, db: DbSession):
    """
    Register a new account on the basic tier.

    Returns an access token on success.
    """
    identity_service = IdentityService(db)
    try:
        await identity_service.register_user(
            email=data.email,
            password=data.password,
            full_name=data.full_name,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    result = await identity_service.authenticate(email=data.email, password=data.password)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to authenticate after registration",
        )

    user, token, expires_in = result
    return TokenResponse(
        access_token=token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(data: UserLogin, db: DbSession):
    """Authenticate and return an access token."""
    result = await IdentityService(db).authenticate(email=data.email, password=data.password)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    user, token, expires_in = result
    return TokenResponse(
        access_token=token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


@router.post("/logout", response_model=SuccessResponse)
async def logout(user: CurrentUser, store: Sessions):
    """End the session; session-scoped progress is discarded."""
    store.delete(progress_session_key(user.id))
    return SuccessResponse(message="Logged out successfully")


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(user: CurrentUser):
    """Get current user's profile."""
    return UserResponse.model_validate(user)
