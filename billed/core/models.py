"""Pydantic models for the Billed service.

This module defines the bill record shared by the store, the controllers and the views, together with the
submission payload built from the new-bill form and the acknowledgement returned once a bill is created.
"""

import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class BillStatus(StrEnum):
    """Review status of a bill. Only managers move a bill out of ``pending``."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REFUSED = "refused"


class ExpenseType(StrEnum):
    """Expense categories offered by the new-bill form."""

    TRANSPORTS = "Transports"
    RESTAURANTS = "Restaurants et bars"
    HOTEL = "Hôtel et logement"
    ONLINE_SERVICES = "Services en ligne"
    IT = "IT et électronique"
    EQUIPMENT = "Equipement et matériel"
    OFFICE_SUPPLIES = "Fournitures de bureau"


class UserType(StrEnum):
    """Roles a connected user can hold."""

    EMPLOYEE = "Employee"
    MANAGER = "Manager"


class User(BaseModel):
    """The connected user, as held by the session."""

    type: UserType
    email: str


class Bill(BaseModel):
    """Pydantic model representing a stored expense bill."""

    id: str
    email: str | None = None
    type: ExpenseType
    name: str = ""
    amount: int
    date: datetime.date
    vat: int | None = None
    pct: int | None = None
    commentary: str = ""
    file_url: str | None = None
    file_name: str | None = None
    status: BillStatus = BillStatus.PENDING


class BillPayload(BaseModel):
    """Submission payload assembled from the new-bill form and the accepted receipt."""

    email: str | None = None
    type: ExpenseType
    name: str = ""
    amount: int
    date: datetime.date
    vat: int | None = None
    pct: int = 20
    commentary: str = ""
    file_name: str | None = None
    file_content_type: str | None = None
    file_data: bytes = Field(default=b"", repr=False)


class CreatedBill(BaseModel):
    """Acknowledgement returned by the store once a bill is created."""

    id: str
    file_url: str | None = None
    file_name: str | None = None
    key: str
