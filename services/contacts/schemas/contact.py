"""
Contact schemas for API requests and responses.

Field constraints are checked by ``ContactWrite.validation_errors`` rather than
by pydantic itself, so a single response can list every violated rule with a
message meant for end users.
"""

import re
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import Field, field_validator

from services.common.responses import CamelModel

NAME_MAX_LENGTH = 100
PHONE_MIN_LENGTH = 5
PHONE_MAX_LENGTH = 15
ADDRESS_MAX_LENGTH = 250

PHONE_PATTERN = re.compile(r"[0-9 +\-()]+")


class ContactWrite(CamelModel):
    """Body of create and update requests. Any ``id`` in the body is ignored."""

    name: Optional[str] = Field(None, description="Contact's name")
    phone_number: Optional[str] = Field(None, description="Contact's phone number")
    email: Optional[str] = Field(None, description="Contact's email address")
    address: Optional[str] = Field(None, description="Contact's postal address")

    @field_validator("email", "address")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Optional fields sent as blank strings count as absent."""
        if v is not None and not v.strip():
            return None
        return v

    def validation_errors(self) -> List[str]:
        """Return one message per violated constraint, in field order."""
        errors: List[str] = []

        if self.name is None or not self.name.strip():
            errors.append("The Name field is required.")
        elif len(self.name) > NAME_MAX_LENGTH:
            errors.append(
                f"The Name field cannot exceed {NAME_MAX_LENGTH} characters."
            )

        if self.phone_number is None or not self.phone_number.strip():
            errors.append("The PhoneNumber field is required.")
        else:
            if not PHONE_MIN_LENGTH <= len(self.phone_number) <= PHONE_MAX_LENGTH:
                errors.append(
                    f"The PhoneNumber field must be between {PHONE_MIN_LENGTH} "
                    f"and {PHONE_MAX_LENGTH} characters."
                )
            if not PHONE_PATTERN.fullmatch(self.phone_number):
                errors.append(
                    "The PhoneNumber field contains invalid characters. It can "
                    "include digits, spaces, plus signs, hyphens, and parentheses."
                )

        if self.email is not None and not is_valid_email(self.email):
            errors.append("The Email field is not a valid email address.")

        if self.address is not None and len(self.address) > ADDRESS_MAX_LENGTH:
            errors.append(
                f"The Address field cannot exceed {ADDRESS_MAX_LENGTH} characters."
            )

        return errors


class ContactRead(CamelModel):
    """Contact as returned by the API."""

    id: int = Field(..., description="Unique contact ID")
    name: str = Field(..., description="Contact's name")
    phone_number: str = Field(..., description="Contact's phone number")
    email: Optional[str] = Field(None, description="Contact's email address")
    address: Optional[str] = Field(None, description="Contact's postal address")


def is_valid_email(value: str) -> bool:
    """Syntax-only email check; no DNS lookups."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
