# User Management Feature - Router

from typing import List
from fastapi import APIRouter, Depends, status
from clinicdesk.features.auth.models import User
from clinicdesk.features.auth.schemas import UserResponse
from clinicdesk.features.auth.dependencies import get_current_user, require_admin
from clinicdesk.features.users.schemas import (
    CreateUserRequest,
    UpdateUserRequest,
    AdminUpdateUserRequest,
)
from clinicdesk.features.users.service import UserService
from clinicdesk.shared.schemas import MessageResponse


router = APIRouter(prefix="/users", tags=["Users"])


# ============== Own Profile ==============

@router.get("/me", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get the current doctor's profile."""
    return UserService.user_to_response(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    request: UpdateUserRequest,
    current_user: User = Depends(get_current_user)
):
    """
    Update the current doctor's profile.

    Changing the email re-checks uniqueness; a new password is re-hashed.
    """
    user = await UserService.update_user(current_user, request)
    return UserService.user_to_response(user)


# ============== Admin Endpoints ==============

@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    _: User = Depends(require_admin)
):
    """Create a user account. Admin only."""
    user = await UserService.create_user(request)
    return UserService.user_to_response(user)


@router.get("", response_model=List[UserResponse])
async def list_users(_: User = Depends(require_admin)):
    """List all user accounts. Admin only."""
    users = await UserService.get_all_users()
    return [UserService.user_to_response(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, _: User = Depends(require_admin)):
    """Get a user account by id. Admin only."""
    user = await UserService.get_user_by_id(user_id)
    return UserService.user_to_response(user)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: AdminUpdateUserRequest,
    _: User = Depends(require_admin)
):
    """Update a user account. Admin only."""
    user = await UserService.get_user_by_id(user_id)
    user = await UserService.update_user(user, request)
    return UserService.user_to_response(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def deactivate_user(user_id: str, _: User = Depends(require_admin)):
    """
    Deactivate a user account. Admin only.

    Accounts are never deleted and cannot be reactivated through the API.
    """
    await UserService.deactivate_user(user_id)
    return MessageResponse(message=f"User {user_id} has been deactivated")
