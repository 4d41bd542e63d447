from typing import Optional
from fastapi import APIRouter, Cookie, Depends, Query, status
from fastapi.responses import RedirectResponse
from clinicdesk.config import settings
from clinicdesk.core import oauth
from clinicdesk.features.auth.schemas import (
    RegisterRequest,
    LoginRequest,
    AuthResponse,
    TokenResponse,
    UserResponse,
)
from clinicdesk.features.auth.service import AuthService
from clinicdesk.features.auth.dependencies import get_current_user
from clinicdesk.features.auth.models import User
from clinicdesk.features.users.service import UserService


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(register_data: RegisterRequest):
    """
    Register a new doctor account.

    - **name**: Doctor's full name
    - **email**: Email address (must be unused)
    - **password**: Password (min 6 chars)
    """
    user, access_token = await AuthService.register(register_data)

    return AuthResponse(access_token=access_token, user=UserService.user_to_response(user))


@router.post("/login", response_model=AuthResponse)
async def login(login_data: LoginRequest):
    """
    Authenticate with email and password and return an access token.
    """
    user, access_token = await AuthService.login(login_data)

    return AuthResponse(access_token=access_token, user=UserService.user_to_response(user))


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get the authenticated doctor's profile."""
    return UserService.user_to_response(current_user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(current_user: User = Depends(get_current_user)):
    """Issue a fresh access token for the authenticated doctor."""
    return TokenResponse(access_token=AuthService.create_token(current_user))


@router.get("/{provider}")
async def oauth_start(provider: oauth.OAuthProviderName):
    """Redirect to the Google or Facebook consent page."""
    state = oauth.new_state()
    response = RedirectResponse(oauth.authorization_url(provider, state))
    response.set_cookie(
        oauth.STATE_COOKIE,
        state,
        max_age=oauth.STATE_MAX_AGE_SECONDS,
        path=f"{settings.API_V1_PREFIX}/auth",
        httponly=True,
        secure=not settings.DEBUG,
        samesite="lax",
    )
    return response


@router.get("/{provider}/callback")
async def oauth_callback(
    provider: oauth.OAuthProviderName,
    code: str = Query(...),
    state: Optional[str] = Query(None),
    oauth_state: Optional[str] = Cookie(None),
):
    """
    OAuth callback.

    Checks the state against the cookie set when the flow started, exchanges
    the code, logs the doctor in (creating the account on first login) and
    redirects to the frontend with the token.
    """
    oauth.verify_state(oauth_state, state)

    profile = await oauth.fetch_profile(provider, code)
    _, access_token = await AuthService.oauth_login(profile)

    response = RedirectResponse(
        f"{settings.FRONTEND_URL.rstrip('/')}/auth/callback?token={access_token}"
    )
    response.delete_cookie(oauth.STATE_COOKIE, path=f"{settings.API_V1_PREFIX}/auth")
    return response
