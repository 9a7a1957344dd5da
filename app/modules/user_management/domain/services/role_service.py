# 📄 File: app/modules/user_management/domain/services/role_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for managing roles: names must be unique, the short "slug" follows the
# name, and a role still given to people cannot be removed.
# 🧪 Purpose (Technical Summary):
# Domain service for Role CRUD with slug derivation, case-insensitive uniqueness
# checks (backed by unique indexes), default-role seeding and mutation events.
# 🔗 Dependencies:
# BaseRepository, RoleModel/UserModel, EventNotifier, slugify
# 🔄 Connected Modules / Calls From:
# app.modules.user_management.presentation.api.v1.roles, app.main (seeding),
# auth_service.py (default user role lookup)

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.core.exceptions import DuplicateResourceError, NotFoundError, ValidationError
from app.shared.core.permissions import ADMIN_ROLE_SLUG, USER_ROLE_SLUG
from app.shared.core.responses import page_payload
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.utils.helpers import slugify
from app.shared.utils.query import QueryParams

from ...infrastructure.database.models import RoleModel, UserModel

logger = logging.getLogger(__name__)

DEFAULT_ROLES = (
    {"name": "Admin", "slug": ADMIN_ROLE_SLUG, "description": "Full access to every resource"},
    {"name": "User", "slug": USER_ROLE_SLUG, "description": "Manages their own businesses"},
)

# Authorization and signup resolve these roles by slug
PROTECTED_SLUGS = frozenset(role["slug"] for role in DEFAULT_ROLES)


class RoleService:
    """
    Domain service for role management business logic.
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.roles = BaseRepository(session, RoleModel, "Role")
        self.notifier = notifier or NullNotifier()

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    async def get_by_slug(self, slug: str) -> Optional[RoleModel]:
        return await self.roles.find_one(func.lower(RoleModel.slug) == slug.lower())

    async def _ensure_unique(self, name: str, slug: str, exclude_id: Optional[UUID] = None) -> None:
        """
        Raises:
            DuplicateResourceError: If another role has the same name or slug (any case)
        """
        conditions = [func.lower(RoleModel.name) == name.lower()]
        if exclude_id is not None:
            conditions.append(RoleModel.id != exclude_id)
        if await self.roles.find_one(*conditions):
            raise DuplicateResourceError("Role name already exists", resource_type="role", field="name", value=name)

        conditions = [func.lower(RoleModel.slug) == slug.lower()]
        if exclude_id is not None:
            conditions.append(RoleModel.id != exclude_id)
        if await self.roles.find_one(*conditions):
            raise DuplicateResourceError("Role slug already exists", resource_type="role", field="slug", value=slug)

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create_role(self, data: Dict[str, Any]) -> Dict[str, Any]:
        name = data["name"]
        slug = slugify(name)
        await self._ensure_unique(name, slug)

        role = self.roles.add(RoleModel(
            name=name,
            slug=slug,
            description=data.get("description"),
            status=data.get("status") or "active",
        ))
        await self.roles.commit("Role name already exists")
        await self.roles.refresh(role)

        logger.info(f"Created role {role.id} ({role.slug})")
        document = role.to_dict()
        self.notifier.broadcast("roleCreated", document)
        return document

    async def list_roles(self, params: QueryParams, status: Optional[str] = None) -> Dict[str, Any]:
        filters = []
        if status:
            filters.append(RoleModel.status == status)
        records, total = await self.roles.paginate(params, filters)
        return page_payload(total, params.page, params.limit, [r.to_dict() for r in records])

    async def get_role(self, role_id: UUID) -> Dict[str, Any]:
        role = await self.roles.get_or_404(role_id, "Role not found")
        return role.to_dict()

    async def update_role(self, role_id: UUID, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Raises:
            NotFoundError: Unknown role
            ValidationError: Renaming a default role would change its slug
            DuplicateResourceError: Another role has the new name or slug
        """
        role = await self.roles.get_or_404(role_id, "Role not found")

        name = changes.get("name")
        if name and name != role.name:
            slug = slugify(name)
            if role.slug in PROTECTED_SLUGS and slug != role.slug:
                raise ValidationError(
                    "Default roles cannot be renamed to a different slug",
                    field="name",
                    value=name,
                )
            await self._ensure_unique(name, slug, exclude_id=role.id)
            role.name = name
            role.slug = slug
        if "description" in changes:
            role.description = changes["description"]
        if changes.get("status"):
            role.status = changes["status"]

        await self.roles.commit("Role name already exists")
        await self.roles.refresh(role)

        logger.info(f"Updated role {role.id}")
        document = role.to_dict()
        self.notifier.broadcast("roleUpdated", document)
        return document

    async def delete_role(self, role_id: UUID) -> None:
        """
        Raises:
            NotFoundError: Unknown role
            DuplicateResourceError: Role is still assigned to users
        """
        role = await self.roles.get_or_404(role_id, "Role not found")

        assigned = await BaseRepository(self.session, UserModel, "User").count(UserModel.role_id == role.id)
        if assigned:
            raise DuplicateResourceError(
                message="Role is assigned to existing users",
                resource_type="role",
                details={"assignedUsers": assigned},
            )

        await self.roles.delete(role)
        await self.roles.commit()

        logger.info(f"Deleted role {role_id}")
        self.notifier.broadcast("roleDeleted", {"id": role_id})

    # =========================================================================
    # SEEDING
    # =========================================================================

    async def seed_default_roles(self) -> int:
        """Create the ``admin`` and ``user`` roles if missing. Returns how many were created."""
        created = 0
        for role in DEFAULT_ROLES:
            if await self.get_by_slug(role["slug"]) is None:
                self.roles.add(RoleModel(status="active", **role))
                created += 1
        if created:
            await self.roles.commit()
            logger.info(f"Seeded {created} default role(s)")
        return created

    async def require_role(self, slug: str) -> RoleModel:
        role = await self.get_by_slug(slug)
        if role is None:
            raise NotFoundError(message="Role not found", resource_type="role")
        return role
