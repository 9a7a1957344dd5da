# 📄 File: app/modules/catalog/domain/services/business_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for businesses: who owns one, which chat contact it may show, and who
# is allowed to change or remove it. Other parts of the menu (categories, items,
# orders) ask this file "may this person manage that business?".
#
# 🧪 Purpose (Technical Summary):
# Domain service for Business CRUD plus ``get_managed_business``, the single
# ownership resolver every business-owned entity goes through before mutating.
#
# 🔗 Dependencies:
# - BaseRepository, populate
# - app.shared.core.permissions (owner-or-admin, list scoping)
# - user_service.resolve_owner_id (owner of a new record)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.catalog.presentation.api.v1.businesses
# - category_service.py, item_service.py
# - app.modules.orders.domain.services.order_service

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.services.user_service import resolve_owner_id
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import AuthorizationError
from app.shared.core.permissions import require_owner_or_admin, scoped_user_filter
from app.shared.core.responses import page_payload
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.infrastructure.database.populate import populate, populate_one
from app.shared.utils.helpers import parse_uuid
from app.shared.utils.query import QueryParams

from ...infrastructure.database.models import BusinessModel, MessagingContactModel
from ...infrastructure.database.relations import BUSINESS_RELATIONS

logger = logging.getLogger(__name__)


async def get_managed_business(
    session: AsyncSession,
    business_id: UUID,
    current_user: CurrentUser,
) -> BusinessModel:
    """
    Load a business and require that the caller owns it or is an admin.

    Every write on a category, item or order resolves its business through here
    before comparing owners.

    Raises:
        NotFoundError: Unknown business
        AuthorizationError: Caller neither owns the business nor is an admin
    """
    business = await BaseRepository(session, BusinessModel, "Business").get_or_404(
        business_id, "Business not found"
    )
    require_owner_or_admin(current_user, business.user_id, "business", business.id)
    return business


class BusinessService:
    """
    Domain service for business management business logic.

    Business rules:
    - A business belongs to exactly one user, fixed at creation
    - Its messaging contact must belong to that same user
    - Reads are public; writes are owner-or-admin
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.businesses = BaseRepository(session, BusinessModel, "Business")
        self.contacts = BaseRepository(session, MessagingContactModel, "Messaging contact")
        self.notifier = notifier or NullNotifier()

    async def expand(self, business: BusinessModel, depth: int = 1) -> Dict[str, Any]:
        return await populate_one(self.session, business.to_dict(), BUSINESS_RELATIONS, depth)

    async def _contact_for_owner(self, raw_contact_id: str, owner_id: UUID) -> MessagingContactModel:
        """
        Raises:
            ValidationError: Malformed id
            NotFoundError: Unknown contact
            AuthorizationError: Contact belongs to someone else
        """
        contact_id = parse_uuid(raw_contact_id, "messaging contact")
        contact = await self.contacts.get_or_404(contact_id, "Messaging contact not found")
        if contact.user_id != owner_id:
            logger.warning(f"Messaging contact {contact.id} does not belong to user {owner_id}")
            raise AuthorizationError(
                message="Messaging contact does not belong to this user",
                resource_type="messaging contact",
                resource_id=str(contact.id),
            )
        return contact

    # =========================================================================
    # CRUD
    # =========================================================================

    async def create_business(self, data: Dict[str, Any], current_user: CurrentUser) -> Dict[str, Any]:
        owner_id = await resolve_owner_id(self.session, current_user, data.get("user_id"))
        contact = await self._contact_for_owner(data["messaging_contact_id"], owner_id)

        business = self.businesses.add(BusinessModel(
            user_id=owner_id,
            messaging_contact_id=contact.id,
            name=data["name"],
            description=data["description"],
            location=data["location"],
            logo=data["logo"],
            image=data["image"],
            status=data.get("status") or "active",
        ))
        await self.businesses.commit()
        await self.businesses.refresh(business)

        logger.info(f"Created business {business.id} for user {owner_id}")
        document = await self.expand(business)
        self.notifier.broadcast("businessCreated", document)
        return document

    async def list_businesses(
        self,
        params: QueryParams,
        current_user: CurrentUser,
        user_id: Optional[UUID] = None,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        filters = []
        owner_id = scoped_user_filter(current_user, user_id)
        if owner_id is not None:
            filters.append(BusinessModel.user_id == owner_id)
        if status:
            filters.append(BusinessModel.status == status)

        records, total = await self.businesses.paginate(params, filters)
        documents = await populate(self.session, [r.to_dict() for r in records], BUSINESS_RELATIONS, params.depth)
        return page_payload(total, params.page, params.limit, documents)

    async def get_business(self, business_id: UUID, depth: int = 1) -> Dict[str, Any]:
        business = await self.businesses.get_or_404(business_id, "Business not found")
        return await self.expand(business, depth)

    async def update_business(
        self,
        business_id: UUID,
        changes: Dict[str, Any],
        current_user: CurrentUser,
    ) -> Dict[str, Any]:
        business = await get_managed_business(self.session, business_id, current_user)

        if changes.get("messaging_contact_id"):
            contact = await self._contact_for_owner(changes["messaging_contact_id"], business.user_id)
            business.messaging_contact_id = contact.id

        for field in ("name", "description", "location", "logo", "image", "status"):
            if changes.get(field):
                setattr(business, field, changes[field])

        await self.businesses.commit()
        await self.businesses.refresh(business)

        logger.info(f"Updated business {business.id}")
        document = await self.expand(business)
        self.notifier.broadcast("businessUpdated", document)
        return document

    async def delete_business(self, business_id: UUID, current_user: CurrentUser) -> None:
        """Hard delete; categories, items and orders go with it at the store level."""
        business = await get_managed_business(self.session, business_id, current_user)

        await self.businesses.delete(business)
        await self.businesses.commit()

        logger.info(f"Deleted business {business_id}")
        self.notifier.broadcast("businessDeleted", {"id": business_id})
