"""
Contact database model for the Contacts Service.
"""

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class Contact(SQLModel, table=True):
    """A single entry of the contact list."""

    __tablename__ = "contacts"  # type: ignore[assignment]
    __table_args__ = (
        UniqueConstraint("phone_number", name="uq_contacts_phone_number"),
        UniqueConstraint("email", name="uq_contacts_email"),
    )

    id: Optional[int] = Field(
        default=None, primary_key=True, description="Unique contact ID"
    )
    name: str = Field(..., max_length=100, description="Contact's name")
    phone_number: str = Field(..., max_length=15, description="Contact's phone number")
    email: Optional[str] = Field(default=None, description="Contact's email address")
    address: Optional[str] = Field(
        default=None, max_length=250, description="Contact's postal address"
    )
