# 📄 File: app/modules/catalog/domain/services/messaging_contact_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for the chat contacts people attach to their businesses: everyone
# manages their own, admins can manage anyone's.
# 🧪 Purpose (Technical Summary):
# Domain service for MessagingContact CRUD with owner scoping, owner-or-admin checks,
# a linked-business delete guard and mutation events.
# 🔗 Dependencies:
# BaseRepository, catalog models/relations, permissions, EventNotifier
# 🔄 Connected Modules / Calls From:
# app.modules.catalog.presentation.api.v1.messaging_contacts

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.services.user_service import resolve_owner_id
from app.shared.core.dependencies import CurrentUser
from app.shared.core.exceptions import DuplicateResourceError
from app.shared.core.permissions import require_owner_or_admin, scoped_user_filter
from app.shared.core.responses import page_payload
from app.shared.events.notifier import EventNotifier, NullNotifier
from app.shared.infrastructure.database.base_repository import BaseRepository
from app.shared.infrastructure.database.populate import populate, populate_one
from app.shared.utils.query import QueryParams

from ...infrastructure.database.models import BusinessModel, MessagingContactModel
from ...infrastructure.database.relations import MESSAGING_CONTACT_RELATIONS

logger = logging.getLogger(__name__)


class MessagingContactService:
    """
    Domain service for messaging contacts.
    """

    def __init__(self, session: AsyncSession, notifier: Optional[EventNotifier] = None):
        self.session = session
        self.contacts = BaseRepository(session, MessagingContactModel, "Messaging contact")
        self.notifier = notifier or NullNotifier()

    async def expand(self, contact: MessagingContactModel, depth: int = 1) -> Dict[str, Any]:
        return await populate_one(self.session, contact.to_dict(), MESSAGING_CONTACT_RELATIONS, depth)

    async def create_contact(self, data: Dict[str, Any], current_user: CurrentUser) -> Dict[str, Any]:
        owner_id = await resolve_owner_id(self.session, current_user, data.get("user_id"))

        contact = self.contacts.add(MessagingContactModel(
            user_id=owner_id,
            name=data.get("name"),
            username=data.get("username"),
            phone_number=data["phone_number"],
            status=data.get("status") or "active",
        ))
        await self.contacts.commit()
        await self.contacts.refresh(contact)

        logger.info(f"Created messaging contact {contact.id} for user {owner_id}")
        document = await self.expand(contact)
        self.notifier.broadcast("messagingContactCreated", document)
        return document

    async def list_contacts(
        self,
        params: QueryParams,
        current_user: CurrentUser,
        user_id: Optional[UUID] = None,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        filters = []
        owner_id = scoped_user_filter(current_user, user_id)
        if owner_id is not None:
            filters.append(MessagingContactModel.user_id == owner_id)
        if status:
            filters.append(MessagingContactModel.status == status)

        records, total = await self.contacts.paginate(params, filters)
        documents = await populate(
            self.session, [r.to_dict() for r in records], MESSAGING_CONTACT_RELATIONS, params.depth
        )
        return page_payload(total, params.page, params.limit, documents)

    async def _load_owned(self, contact_id: UUID, current_user: CurrentUser) -> MessagingContactModel:
        contact = await self.contacts.get_or_404(contact_id, "Messaging contact not found")
        require_owner_or_admin(current_user, contact.user_id, "messaging contact", contact.id)
        return contact

    async def get_contact(self, contact_id: UUID, current_user: CurrentUser) -> Dict[str, Any]:
        return await self.expand(await self._load_owned(contact_id, current_user))

    async def update_contact(
        self,
        contact_id: UUID,
        changes: Dict[str, Any],
        current_user: CurrentUser,
    ) -> Dict[str, Any]:
        contact = await self._load_owned(contact_id, current_user)

        for field in ("name", "username"):
            if field in changes:
                setattr(contact, field, changes[field])
        if changes.get("phone_number"):
            contact.phone_number = changes["phone_number"]
        if changes.get("status"):
            contact.status = changes["status"]

        await self.contacts.commit()
        await self.contacts.refresh(contact)

        logger.info(f"Updated messaging contact {contact.id}")
        document = await self.expand(contact)
        self.notifier.broadcast("messagingContactUpdated", document)
        return document

    async def delete_contact(self, contact_id: UUID, current_user: CurrentUser) -> None:
        """
        Raises:
            DuplicateResourceError: A business still shows this contact
        """
        contact = await self._load_owned(contact_id, current_user)

        linked = await BaseRepository(self.session, BusinessModel, "Business").count(
            BusinessModel.messaging_contact_id == contact.id
        )
        if linked:
            raise DuplicateResourceError(
                message="Messaging contact is linked to existing businesses",
                resource_type="messaging contact",
                details={"linkedBusinesses": linked},
            )

        await self.contacts.delete(contact)
        await self.contacts.commit()

        logger.info(f"Deleted messaging contact {contact_id}")
        self.notifier.broadcast("messagingContactDeleted", {"id": contact_id})
