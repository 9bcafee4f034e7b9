"""
Contact API endpoints for the Contacts Service.

Provides the RESTful API for contact CRUD operations with search, sorting
and pagination. Every endpoint answers with the ``ApiResponse`` envelope;
failures raised by the service layer are turned into envelopes by the
exception handlers registered in ``services.common.http_errors``.
"""

from fastapi import APIRouter, Body, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from services.common.http_errors import ContactsAPIException, ServiceError
from services.common.logging_config import get_logger
from services.common.pagination import PagedData
from services.common.responses import ApiResponse
from services.contacts.database import get_async_session
from services.contacts.schemas.contact import ContactRead, ContactWrite
from services.contacts.services.contact_service import (
    DEFAULT_SORT_FIELD,
    ContactService,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])


async def get_contact_service() -> ContactService:
    """Get contact service instance."""
    return ContactService()


@router.post("", response_model=ApiResponse[ContactRead])
async def create_contact(
    contact_data: ContactWrite = Body(...),
    session: AsyncSession = Depends(get_async_session),
    contact_service: ContactService = Depends(get_contact_service),
) -> ApiResponse[ContactRead]:
    """Create a new contact."""
    try:
        contact = await contact_service.create_contact(session, contact_data)
        return ApiResponse[ContactRead].ok(contact, "Contact created successfully")
    except ContactsAPIException:
        raise
    except Exception as e:
        logger.error(f"Error creating contact: {e}")
        raise ServiceError("Failed to create contact") from e


@router.get("", response_model=ApiResponse[PagedData[ContactRead]])
async def list_contacts(
    search_term: str = Query(
        "", alias="searchTerm", description="Substring of name, phone or email"
    ),
    sort_by: str = Query(
        DEFAULT_SORT_FIELD,
        alias="sortBy",
        description="Sort field: name, phoneNumber or email",
    ),
    sort_descending: bool = Query(
        False, alias="sortDescending", description="Sort in descending order"
    ),
    page_number: int = Query(1, alias="pageNumber", description="1-based page number"),
    page_size: int = Query(10, alias="pageSize", description="Contacts per page"),
    session: AsyncSession = Depends(get_async_session),
    contact_service: ContactService = Depends(get_contact_service),
) -> ApiResponse[PagedData[ContactRead]]:
    """List contacts with optional search, sorting and pagination."""
    try:
        page = await contact_service.list_contacts(
            session,
            search_term=search_term,
            sort_by=sort_by,
            sort_descending=sort_descending,
            page_number=page_number,
            page_size=page_size,
        )
    except ContactsAPIException:
        raise
    except Exception as e:
        logger.error(f"Error listing contacts: {e}")
        raise ServiceError("Failed to list contacts") from e

    message = (
        "No contacts found"
        if page.total_count == 0
        else "Contacts retrieved successfully"
    )
    return ApiResponse[PagedData[ContactRead]].ok(page, message)


@router.get("/{contact_id}", response_model=ApiResponse[ContactRead])
async def get_contact(
    contact_id: int = Path(..., description="Contact ID to retrieve"),
    session: AsyncSession = Depends(get_async_session),
    contact_service: ContactService = Depends(get_contact_service),
) -> ApiResponse[ContactRead]:
    """Get a specific contact by ID."""
    try:
        contact = await contact_service.get_contact(session, contact_id)
        return ApiResponse[ContactRead].ok(contact, "Contact retrieved successfully")
    except ContactsAPIException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving contact {contact_id}: {e}")
        raise ServiceError("Failed to retrieve contact") from e


@router.put("/{contact_id}", response_model=ApiResponse[ContactRead])
async def update_contact(
    contact_id: int = Path(..., description="Contact ID to update"),
    contact_data: ContactWrite = Body(...),
    session: AsyncSession = Depends(get_async_session),
    contact_service: ContactService = Depends(get_contact_service),
) -> ApiResponse[ContactRead]:
    """Replace the name, phone number, email and address of a contact."""
    try:
        contact = await contact_service.update_contact(
            session, contact_id, contact_data
        )
        return ApiResponse[ContactRead].ok(contact, "Contact updated successfully")
    except ContactsAPIException:
        raise
    except Exception as e:
        logger.error(f"Error updating contact {contact_id}: {e}")
        raise ServiceError("Failed to update contact") from e


@router.delete("/{contact_id}", response_model=ApiResponse[ContactRead])
async def delete_contact(
    contact_id: int = Path(..., description="Contact ID to delete"),
    session: AsyncSession = Depends(get_async_session),
    contact_service: ContactService = Depends(get_contact_service),
) -> ApiResponse[ContactRead]:
    """Delete a contact and return the removed record."""
    try:
        contact = await contact_service.delete_contact(session, contact_id)
        return ApiResponse[ContactRead].ok(contact, "Contact deleted successfully")
    except ContactsAPIException:
        raise
    except Exception as e:
        logger.error(f"Error deleting contact {contact_id}: {e}")
        raise ServiceError("Failed to delete contact") from e
