"""
Contact service for business logic operations on contacts.

Provides validation, duplicate detection, CRUD operations and the
search/sort/paging used by the list endpoint.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.common.http_errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from services.common.logging_config import get_logger
from services.common.pagination import PagedData, PageRequest
from services.contacts.models.contact import Contact
from services.contacts.schemas.contact import ContactRead, ContactWrite

logger = get_logger(__name__)

DEFAULT_SORT_FIELD = "name"

# Lower-cased sort names accepted by the list endpoint
SORT_COLUMNS: Dict[str, Any] = {
    "name": Contact.name,
    "phonenumber": Contact.phone_number,
    "email": Contact.email,
}


def phone_exists_message(phone_number: str) -> str:
    return f"A contact with the phone number '{phone_number}' already exists."


def email_exists_message(email: str) -> str:
    return f"A contact with the email address '{email}' already exists."


class ContactService:
    """Service for contact business logic operations."""

    def ensure_valid(self, contact_data: ContactWrite, operation: str) -> None:
        """Raise ValidationError listing every violated field constraint."""
        errors = contact_data.validation_errors()
        if errors:
            logger.warning(
                f"Validation failed for contact {operation}",
                errors=", ".join(errors),
            )
            raise ValidationError(errors)

    async def find_duplicate_errors(
        self,
        session: AsyncSession,
        phone_number: str,
        email: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> List[str]:
        """
        Look up stored contacts sharing the phone number or email.

        Returns one message per colliding field; empty when there is no clash.
        Emails are compared case-insensitively. A contact without an email
        never collides on email.
        """
        conditions = [Contact.phone_number == phone_number]
        if email:
            conditions.append(func.lower(Contact.email) == email.lower())

        query = select(Contact).where(or_(*conditions))  # type: ignore[arg-type]
        if exclude_id is not None:
            query = query.where(Contact.id != exclude_id)  # type: ignore[arg-type]

        result = await session.execute(query)
        matches = list(result.scalars().all())

        errors: List[str] = []
        phone_match = next(
            (c for c in matches if c.phone_number == phone_number), None
        )
        if phone_match is not None:
            errors.append(phone_exists_message(phone_match.phone_number))
        if email:
            email_match = next(
                (c for c in matches if c.email and c.email.lower() == email.lower()),
                None,
            )
            if email_match is not None and email_match.email:
                errors.append(email_exists_message(email_match.email))
        return errors

    async def _ensure_unique(
        self,
        session: AsyncSession,
        contact_data: ContactWrite,
        exclude_id: Optional[int] = None,
    ) -> None:
        # Check-then-act; the unique constraints catch writers that race past it
        errors = await self.find_duplicate_errors(
            session,
            phone_number=contact_data.phone_number or "",
            email=contact_data.email,
            exclude_id=exclude_id,
        )
        if errors:
            logger.warning("Duplicate contact detected", errors=", ".join(errors))
            raise ConflictError("Duplicate contact detected", errors=errors)

    async def _commit(self, session: AsyncSession) -> None:
        try:
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            logger.warning("Unique constraint rejected contact write", error=str(e.orig))
            raise ConflictError(
                "Duplicate contact detected",
                errors=[
                    "A contact with the same phone number or email already exists."
                ],
            ) from e

    async def create_contact(
        self, session: AsyncSession, contact_data: ContactWrite
    ) -> ContactRead:
        """Validate, check for duplicates, then store a new contact."""
        self.ensure_valid(contact_data, "creation")
        await self._ensure_unique(session, contact_data)

        contact = Contact(
            name=contact_data.name,
            phone_number=contact_data.phone_number,
            email=contact_data.email,
            address=contact_data.address,
        )
        session.add(contact)
        await self._commit(session)
        await session.refresh(contact)

        logger.info(f"Created contact {contact.id}")
        return ContactRead.model_validate(contact)

    async def get_contact_by_id(
        self, session: AsyncSession, contact_id: int
    ) -> Optional[Contact]:
        """Get a contact by ID, or None when it does not exist."""
        result = await session.execute(
            select(Contact).where(Contact.id == contact_id)  # type: ignore[arg-type]
        )
        return result.scalar_one_or_none()

    async def get_contact(self, session: AsyncSession, contact_id: int) -> ContactRead:
        contact = await self.get_contact_by_id(session, contact_id)
        if contact is None:
            raise NotFoundError(
                "Contact",
                contact_id,
                errors=["The requested contact does not exist."],
            )
        return ContactRead.model_validate(contact)

    async def list_contacts(
        self,
        session: AsyncSession,
        search_term: str = "",
        sort_by: str = DEFAULT_SORT_FIELD,
        sort_descending: bool = False,
        page_number: int = 1,
        page_size: int = 10,
    ) -> PagedData[ContactRead]:
        """
        Search, sort and page through contacts.

        An empty result is a valid page (total 0), not an error. The
        requested page number and size are echoed back even when they point
        past the last page.
        """
        page = PageRequest(page_number=page_number, page_size=page_size)
        invalid = page.invalid_reasons()
        if invalid:
            message, error = invalid[0]
            raise BadRequestError(message, errors=[error])

        query = select(Contact)

        term = (search_term or "").strip()
        if term:
            query = query.where(
                or_(
                    Contact.name.icontains(term, autoescape=True),  # type: ignore[union-attr]
                    Contact.phone_number.icontains(term, autoescape=True),  # type: ignore[union-attr]
                    Contact.email.icontains(term, autoescape=True),  # type: ignore[union-attr]
                )
            )

        total = await session.scalar(
            select(func.count()).select_from(query.subquery())
        )
        total = total or 0
        if total == 0:
            return PagedData[ContactRead].empty(page)
        # Offsets past the last row may not fit a database integer
        if page.offset >= total:
            return PagedData[ContactRead].from_page([], total, page)

        sort_column = SORT_COLUMNS.get((sort_by or "").lower(), Contact.name)
        order = sort_column.desc() if sort_descending else sort_column.asc()
        # Tie-break on id so pages never overlap
        query = (
            query.order_by(order, Contact.id)  # type: ignore[arg-type]
            .offset(page.offset)
            .limit(min(page.page_size, total - page.offset))
        )

        result = await session.execute(query)
        items = [ContactRead.model_validate(c) for c in result.scalars().all()]
        return PagedData[ContactRead].from_page(items, total, page)

    async def update_contact(
        self, session: AsyncSession, contact_id: int, contact_data: ContactWrite
    ) -> ContactRead:
        """Replace the four mutable fields of an existing contact."""
        self.ensure_valid(contact_data, "update")

        contact = await self.get_contact_by_id(session, contact_id)
        if contact is None:
            raise NotFoundError(
                "Contact",
                contact_id,
                errors=["The contact you are trying to update does not exist."],
            )

        await self._ensure_unique(session, contact_data, exclude_id=contact_id)

        contact.name = contact_data.name  # type: ignore[assignment]
        contact.phone_number = contact_data.phone_number  # type: ignore[assignment]
        contact.email = contact_data.email
        contact.address = contact_data.address

        session.add(contact)
        await self._commit(session)
        await session.refresh(contact)

        logger.info(f"Updated contact {contact_id}")
        return ContactRead.model_validate(contact)

    async def delete_contact(
        self, session: AsyncSession, contact_id: int
    ) -> ContactRead:
        """Remove a contact and return it as it was before deletion."""
        contact = await self.get_contact_by_id(session, contact_id)
        if contact is None:
            raise NotFoundError(
                "Contact",
                contact_id,
                errors=["The contact you are trying to delete does not exist."],
            )

        deleted = ContactRead.model_validate(contact)
        await session.delete(contact)
        await session.commit()

        logger.info(f"Deleted contact {contact_id}")
        return deleted
