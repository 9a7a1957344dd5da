# 📄 File: app/modules/catalog/presentation/api/v1/messaging_contacts.py
# 🧭 Purpose (Layman Explanation):
# Web addresses for saving and managing the chat contacts shown on businesses.
# 🧪 Purpose (Technical Summary):
# FastAPI MessagingContact endpoints; all authenticated, lists scoped to the caller
# unless admin, single-record routes owner-or-admin.
# 🔗 Dependencies:
# FastAPI router, MessagingContactService, contact_schemas, auth dependencies
# 🔄 Connected Modules / Calls From:
# app.api.v1.router (mounted at /messaging-contacts)

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.presentation.dependencies import get_current_user
from app.shared.core.dependencies import CurrentUser, get_notifier
from app.shared.core.responses import success_response
from app.shared.events.notifier import EventNotifier
from app.shared.infrastructure.database.session import get_db_session
from app.shared.utils.helpers import parse_optional_uuid, parse_uuid
from app.shared.utils.query import QueryParams, get_list_params

from ....domain.services.messaging_contact_service import MessagingContactService
from ..schemas.contact_schemas import (
    ContactStatus,
    MessagingContactCreateRequest,
    MessagingContactUpdateRequest,
)

logger = logging.getLogger(__name__)

messaging_contacts_router = APIRouter()


def get_contact_service(
    db: AsyncSession = Depends(get_db_session),
    notifier: EventNotifier = Depends(get_notifier),
) -> MessagingContactService:
    return MessagingContactService(db, notifier)


@messaging_contacts_router.post("", status_code=status.HTTP_201_CREATED, summary="Create messaging contact")
async def create_contact(
    payload: MessagingContactCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: MessagingContactService = Depends(get_contact_service),
):
    contact = await service.create_contact(payload.model_dump(), current_user)
    return success_response("Messaging contact created successfully", contact, status.HTTP_201_CREATED)


@messaging_contacts_router.get("", summary="List messaging contacts")
async def list_contacts(
    params: QueryParams = Depends(get_list_params),
    user_id: Optional[str] = Query(None, alias="userId"),
    contact_status: Optional[ContactStatus] = Query(None, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    service: MessagingContactService = Depends(get_contact_service),
):
    result = await service.list_contacts(
        params, current_user, parse_optional_uuid(user_id, "user"), contact_status
    )
    return success_response("Messaging contacts fetched successfully", result)


@messaging_contacts_router.get("/{contact_id}", summary="Get messaging contact")
async def get_contact(
    contact_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: MessagingContactService = Depends(get_contact_service),
):
    contact = await service.get_contact(parse_uuid(contact_id, "messaging contact"), current_user)
    return success_response("Messaging contact fetched successfully", contact)


@messaging_contacts_router.patch("/{contact_id}", summary="Update messaging contact")
async def update_contact(
    contact_id: str,
    payload: MessagingContactUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: MessagingContactService = Depends(get_contact_service),
):
    contact = await service.update_contact(
        parse_uuid(contact_id, "messaging contact"), payload.changes(), current_user
    )
    return success_response("Messaging contact updated successfully", contact)


@messaging_contacts_router.delete("/{contact_id}", summary="Delete messaging contact")
async def delete_contact(
    contact_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: MessagingContactService = Depends(get_contact_service),
):
    await service.delete_contact(parse_uuid(contact_id, "messaging contact"), current_user)
    return success_response("Messaging contact deleted successfully")
