# 📄 File: app/modules/user_management/domain/services/user_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for managing user accounts: who can see or change an account, keeping
# usernames and emails unique, and never handing out passwords.
# 🧪 Purpose (Technical Summary):
# Domain service for User reads/updates/deletes with owner-or-admin checks, admin-only
# role changes, uniqueness validation, password hashing and role expansion.
# 🔗 Dependencies:
# BaseRepository, UserModel/RoleModel, SecurityManager, populate, EventNotifier
# 🔄 Connected Modules / Calls From:
# app.modules.user_management.presentation.api.v1.users, auth_service.py,
# catalog business/messaging contact services and user_subscription_service (resolve_owner_id)

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import AuthorizationError, DuplicateResourceError, NotFoundError
from app.shared.core.permissions import require_owner_or_admin
from app.shared.core.responses import page_payload
from app.shared.core.security import get_security_manager
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.infrastructure.database.populate import populate, populate_one
from app.shared.utils.helpers import parse_optional_uuid, parse_uuid
from app.shared.utils.query import QueryParams

from ...infrastructure.database.models import RoleModel, UserModel
from ...infrastructure.database.relations import USER_RELATIONS

logger = logging.getLogger(__name__)


async def resolve_owner_id(session: AsyncSession, current_user: CurrentUser, raw_user_id: Optional[str]) -> UUID:
    """
    Owner of a record being created: the caller, or for admins any existing user.

    Raises:
        ValidationError: Malformed user id
        AuthorizationError: A non-admin names another user
        NotFoundError: The named user does not exist
    """
    requested = parse_optional_uuid(raw_user_id, "user")
    if requested is None:
        return current_user.user_id

    require_owner_or_admin(
        current_user,
        requested,
        "user",
        requested,
        message="You can only create records for yourself",
    )
    await BaseRepository(session, UserModel, "User").get_or_404(requested, "User not found")
    return requested


class UserService:
    """
    Domain service for user management business logic.
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.users = BaseRepository(session, UserModel, "User")
        self.notifier = notifier or NullNotifier()
        self.security = get_security_manager()

    # =========================================================================
    # LOOKUPS AND VALIDATION
    # =========================================================================

    async def get_by_username(self, username: str) -> Optional[UserModel]:
        return await self.users.find_one(UserModel.username == username)

    async def get_by_email(self, email: str) -> Optional[UserModel]:
        return await self.users.find_one(func.lower(UserModel.email) == email.lower())

    async def ensure_username_available(self, username: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await self.get_by_username(username)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateResourceError(
                "Username already exists", resource_type="user", field="username", value=username
            )

    async def ensure_email_available(self, email: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await self.get_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateResourceError(
                "Email already exists", resource_type="user", field="email", value=email
            )

    async def expand(self, user: UserModel, depth: int = 1) -> Dict[str, Any]:
        """Public representation with the role expanded."""
        return await populate_one(self.session, user.to_dict(), USER_RELATIONS, depth)

    # =========================================================================
    # CREATION (used by auth flows)
    # =========================================================================

    async def create_user(
        self,
        name: str,
        username: str,
        email: str,
        password: str,
        role: RoleModel,
        phone_number: Optional[str] = None,
    ) -> UserModel:
        """
        Create and commit a user account.

        Raises:
            DuplicateResourceError: If username or email is taken
        """
        await self.ensure_username_available(username)
        await self.ensure_email_available(email)

        user = self.users.add(UserModel(
            name=name,
            username=username,
            email=email.lower(),
            password_hash=self.security.get_password_hash(password),
            phone_number=phone_number,
            role_id=role.id,
        ))
        await self.users.commit("Username or email already exists")
        await self.users.refresh(user)
        logger.info(f"Created user {user.id} ({user.username})")
        return user

    # =========================================================================
    # CRUD
    # =========================================================================

    async def list_users(self, params: QueryParams, role_id: Optional[UUID] = None) -> Dict[str, Any]:
        filters = []
        if role_id is not None:
            filters.append(UserModel.role_id == role_id)
        records, total = await self.users.paginate(params, filters)
        documents = await populate(self.session, [r.to_dict() for r in records], USER_RELATIONS, params.depth)
        return page_payload(total, params.page, params.limit, documents)

    async def get_user(self, user_id: UUID, current_user: CurrentUser) -> Dict[str, Any]:
        user = await self.users.get_or_404(user_id, "User not found")
        require_owner_or_admin(current_user, user.id, "user", user.id)
        return await self.expand(user)

    async def update_user(
        self,
        user_id: UUID,
        changes: Dict[str, Any],
        current_user: CurrentUser,
    ) -> Dict[str, Any]:
        """
        Apply a partial update.

        Raises:
            NotFoundError: Unknown user or role
            AuthorizationError: Not the owner, or a non-admin changing roles
            DuplicateResourceError: Username or email taken by another account
        """
        user = await self.users.get_or_404(user_id, "User not found")
        require_owner_or_admin(current_user, user.id, "user", user.id)

        if changes.get("username") and changes["username"] != user.username:
            await self.ensure_username_available(changes["username"], exclude_id=user.id)
            user.username = changes["username"]

        if changes.get("email") and changes["email"].lower() != user.email.lower():
            await self.ensure_email_available(changes["email"], exclude_id=user.id)
            user.email = changes["email"].lower()

        if changes.get("role_id"):
            role_id = parse_uuid(changes["role_id"], "role")
            if role_id != user.role_id:
                if not current_user.is_admin():
                    raise AuthorizationError(
                        message="Access denied. Admin role required.",
                        required_permission="admin",
                    )
                if await self.session.get(RoleModel, role_id) is None:
                    raise NotFoundError(message="Role not found", resource_type="role", resource_id=str(role_id))
                user.role_id = role_id

        if changes.get("name"):
            user.name = changes["name"]
        if "phone_number" in changes:
            user.phone_number = changes["phone_number"]
        if changes.get("password"):
            user.password_hash = self.security.get_password_hash(changes["password"])

        await self.users.commit("Username or email already exists")
        await self.users.refresh(user)

        logger.info(f"Updated user {user.id}")
        document = await self.expand(user)
        self.notifier.broadcast("userUpdated", document)
        return document

    async def delete_user(self, user_id: UUID, current_user: CurrentUser) -> None:
        user = await self.users.get_or_404(user_id, "User not found")
        require_owner_or_admin(current_user, user.id, "user", user.id)

        await self.users.delete(user)
        await self.users.commit()

        logger.info(f"Deleted user {user_id}")
        self.notifier.broadcast("userDeleted", {"id": user_id})
