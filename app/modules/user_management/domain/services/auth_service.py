# 📄 File: app/modules/user_management/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Handles signing up, signing in with a username or email, signing in through another
# provider's account, and creating the first admin account when the service starts.
# 🧪 Purpose (Technical Summary):
# Domain service implementing authentication business logic: registration into the
# default ``user`` role, credential verification, federated auto-provisioning with
# deduplicated usernames, token issuance and admin bootstrap.
# 🔗 Dependencies:
# UserService, RoleService, app.shared.core.security, EventNotifier
# 🔄 Connected Modules / Calls From:
# app.modules.user_management.presentation.api.v1.auth, app.main (admin bootstrap)

import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings import Settings
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import AuthenticationError, DuplicateResourceError, NotFoundError
from app.shared.core.permissions import ADMIN_ROLE_SLUG, USER_ROLE_SLUG
from app.shared.core.security import get_security_manager
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.utils.helpers import display_name_from, random_suffix, username_base_from

from ..services.role_service import RoleService
from ..services.user_service import UserService

logger = logging.getLogger(__name__)

# Bounded so a saturated base name cannot spin forever
MAX_USERNAME_ATTEMPTS = 50


class AuthService:
    """
    Domain service for authentication business logic.

    Business rules:
    - New accounts always join the ``user`` role, which must exist
    - Sign-in accepts a username or an email (anything containing ``@``)
    - Federated sign-in provisions an account on first use
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.notifier = notifier or NullNotifier()
        self.security = get_security_manager()
        self.user_service = UserService(session, self.notifier)
        self.role_service = RoleService(session, self.notifier)

    def _issue_token(self, user) -> str:
        return self.security.create_access_token(str(user.id))

    async def signup(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Register a new account.

        Raises:
            NotFoundError: The ``user`` role has not been created
            DuplicateResourceError: Username or email taken
        """
        role = await self.role_service.require_role(USER_ROLE_SLUG)

        user = await self.user_service.create_user(
            name=data["name"],
            username=data["username"],
            email=data["email"],
            password=data["password"],
            role=role,
            phone_number=data.get("phone_number"),
        )

        document = await self.user_service.expand(user)
        self.notifier.broadcast("userCreated", document)
        return {"user": document, "token": self._issue_token(user)}

    async def signin(self, username_or_email: str, password: str) -> Dict[str, Any]:
        """
        Verify credentials and issue a token.

        Raises:
            NotFoundError: No account matches
            AuthenticationError: Wrong password
        """
        if "@" in username_or_email:
            user = await self.user_service.get_by_email(username_or_email)
        else:
            user = await self.user_service.get_by_username(username_or_email)

        if user is None:
            raise NotFoundError(message="User not found", resource_type="user")

        if not self.security.verify_password(password, user.password_hash):
            logger.warning(f"Failed sign-in for user {user.id}")
            raise AuthenticationError(message="Invalid password", error_code="INVALID_CREDENTIALS")

        logger.info(f"User {user.id} signed in")
        document = await self.user_service.expand(user)
        self.notifier.broadcast("userSignedIn", document)
        return {"user": document, "token": self._issue_token(user)}

    async def oauth(self, email: str, display_name: str, name: Optional[str] = None) -> Tuple[Dict[str, Any], bool]:
        """
        Federated sign-in.

        Returns:
            Tuple of (``{user, token}``, created flag)

        Raises:
            NotFoundError: The ``user`` role has not been created
        """
        existing = await self.user_service.get_by_email(email)
        if existing is not None:
            logger.info(f"Federated sign-in for existing user {existing.id}")
            document = await self.user_service.expand(existing)
            return {"user": document, "token": self._issue_token(existing)}, False

        role = await self.role_service.require_role(USER_ROLE_SLUG)
        username = await self._unique_username(display_name)

        user = await self.user_service.create_user(
            name=name or display_name_from(display_name) or username,
            username=username,
            email=email,
            password=self.security.generate_random_password(),
            role=role,
        )

        document = await self.user_service.expand(user)
        self.notifier.broadcast("userCreated", document)
        return {"user": document, "token": self._issue_token(user)}, True

    async def _unique_username(self, display_name: str) -> str:
        base = username_base_from(display_name) or "user"
        for _ in range(MAX_USERNAME_ATTEMPTS):
            candidate = f"{base}{random_suffix()}"
            if await self.user_service.get_by_username(candidate) is None:
                return candidate
        raise DuplicateResourceError(
            message="Could not allocate a unique username, please try again",
            resource_type="user",
            field="username",
        )

    async def me(self, current_user: CurrentUser) -> Dict[str, Any]:
        user = await self.user_service.users.get_or_404(current_user.user_id, "User not found")
        return await self.user_service.expand(user)

    async def bootstrap_admin(self, settings: Settings) -> bool:
        """
        Create the configured admin account when a password is set and the email is unused.

        Returns:
            bool: True if an account was created
        """
        if not settings.ADMIN_PASSWORD:
            return False
        if await self.user_service.get_by_email(settings.ADMIN_EMAIL) is not None:
            return False

        role = await self.role_service.require_role(ADMIN_ROLE_SLUG)
        user = await self.user_service.create_user(
            name="Administrator",
            username=settings.ADMIN_USERNAME,
            email=settings.ADMIN_EMAIL,
            password=settings.ADMIN_PASSWORD,
            role=role,
        )
        logger.info(f"Bootstrapped admin account {user.id}")
        return True
