from clinicdesk.features.auth.models import User
from clinicdesk.features.auth.schemas import RegisterRequest, LoginRequest, OAuthProfile
from clinicdesk.features.users.schemas import CreateUserRequest
from clinicdesk.features.users.service import UserService
from clinicdesk.core.security import verify_password, create_access_token
from clinicdesk.shared.exceptions import CredentialsException
from clinicdesk.core.logging import logger


class AuthService:
    """Authentication service for handling auth business logic."""

    @staticmethod
    def create_token(user: User) -> str:
        """Create an access token identifying the user by id."""
        return create_access_token(
            data={"sub": str(user.id), "email": user.email, "role": user.role}
        )

    @staticmethod
    async def register(register_data: RegisterRequest) -> tuple[User, str]:
        """
        Register a new doctor with email and password.

        Returns:
            tuple: (user, access_token)
        """
        user = await UserService.create_user(
            CreateUserRequest(
                **register_data.model_dump(),
                provider="email",
                role="doctor",
            )
        )

        return user, AuthService.create_token(user)

    @staticmethod
    async def login(login_data: LoginRequest) -> tuple[User, str]:
        """
        Authenticate user and return access token.

        Returns:
            tuple: (user, access_token)
        """
        user = await UserService.get_user_by_email(login_data.email)
        if not user:
            logger.warning("Login attempt for unknown email")
            raise CredentialsException("Invalid credentials")

        if not user.is_active:
            logger.warning(f"Login attempt for inactive user {user.id}")
            raise CredentialsException("Account is inactive")

        if not verify_password(login_data.password, user.password_hash):
            logger.warning(f"Wrong password for user {user.id}")
            raise CredentialsException("Invalid credentials")

        return user, AuthService.create_token(user)

    @staticmethod
    async def oauth_login(profile: OAuthProfile) -> tuple[User, str]:
        """
        Log in (or sign up) with an OAuth identity.

        Returns:
            tuple: (user, access_token)
        """
        user = await UserService.find_or_create_oauth_user(profile)

        if not user.is_active:
            logger.warning(f"OAuth login for inactive user {user.id}")
            raise CredentialsException("Account is inactive")

        return user, AuthService.create_token(user)
