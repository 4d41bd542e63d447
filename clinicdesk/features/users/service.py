# User Management Feature - Service

from typing import List, Optional
from beanie import PydanticObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError
from clinicdesk.features.auth.models import User
from clinicdesk.features.auth.schemas import OAuthProfile, UserResponse
from clinicdesk.features.users.schemas import CreateUserRequest, UpdateUserRequest
from clinicdesk.core.security import get_password_hash
from clinicdesk.core.logging import logger
from clinicdesk.shared.exceptions import ConflictException, NotFoundException


class UserService:
    """Service class for doctor account operations."""

    @staticmethod
    async def create_user(request: CreateUserRequest) -> User:
        """Create a new user, hashing the password when one is given."""
        existing_user = await User.find_one(User.email == request.email)
        if existing_user:
            raise ConflictException("Email already exists")

        data = request.model_dump(exclude={"password"})
        user = User(
            **data,
            password_hash=get_password_hash(request.password) if request.password else None,
        )
        try:
            await user.insert()
        except DuplicateKeyError:
            raise ConflictException("Email already exists")

        logger.info(f"Created {user.role} account {user.id} ({user.provider})")
        return user

    @staticmethod
    async def get_all_users() -> List[User]:
        """Get every account, oldest first."""
        return await User.find_all().sort(+User.created_at).to_list()

    @staticmethod
    async def get_user_by_id(user_id: str) -> User:
        """Get a user by their id."""
        try:
            user = await User.get(PydanticObjectId(user_id))
        except (InvalidId, TypeError, ValueError):
            user = None

        if not user:
            raise NotFoundException(f"User with ID {user_id} not found")

        return user

    @staticmethod
    async def get_user_by_email(email: str) -> Optional[User]:
        """Get user by email (includes the password hash, for authentication)."""
        return await User.find_one(User.email == email)

    @staticmethod
    async def update_user(user: User, request: UpdateUserRequest) -> User:
        """Apply a partial update to a user."""
        update_dict = request.model_dump(exclude_unset=True)

        new_email = update_dict.get("email")
        if new_email and new_email != user.email:
            if await User.find_one(User.email == new_email):
                raise ConflictException("Email already exists")

        password = update_dict.pop("password", None)
        if password:
            user.password_hash = get_password_hash(password)

        for field, value in update_dict.items():
            if value is not None:
                setattr(user, field, value)

        user.update_timestamp()
        try:
            await user.save()
        except DuplicateKeyError:
            raise ConflictException("Email already exists")

        logger.info(f"Updated user {user.id}")
        return user

    @staticmethod
    async def deactivate_user(user_id: str) -> None:
        """Soft delete: users are never removed, only marked inactive."""
        user = await UserService.get_user_by_id(user_id)
        user.is_active = False
        user.update_timestamp()
        await user.save()

        logger.info(f"Deactivated user {user_id}")

    @staticmethod
    async def find_or_create_oauth_user(profile: OAuthProfile) -> User:
        """
        Resolve an OAuth identity to a user.

        Lookup order: provider id, then email (linking the provider id to the
        existing account), then a new account with the email pre-verified.
        """
        provider_field = "google_id" if profile.provider == "google" else "facebook_id"

        user = await User.find_one({provider_field: profile.provider_id})
        if user:
            return user

        user = await User.find_one(User.email == profile.email)
        if user:
            setattr(user, provider_field, profile.provider_id)
            user.update_timestamp()
            await user.save()
            logger.info(f"Linked {profile.provider} identity to user {user.id}")
            return user

        user = User(
            email=profile.email,
            name=profile.name,
            provider=profile.provider,
            profile_photo=profile.photo,
            is_email_verified=True,
            **{provider_field: profile.provider_id},
        )
        await user.insert()

        logger.info(f"Created user {user.id} from {profile.provider} login")
        return user

    @staticmethod
    def user_to_response(user: User) -> UserResponse:
        """Convert User model to response schema."""
        return UserResponse(
            id=str(user.id),
            name=user.name,
            email=user.email,
            phone=user.phone,
            specialization=user.specialization,
            license_number=user.license_number,
            profile_photo=user.profile_photo,
            provider=user.provider,
            role=user.role,
            is_active=user.is_active,
            is_email_verified=user.is_email_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
