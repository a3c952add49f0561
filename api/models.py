"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
JSON field names follow the public contract (camelCase `seatNumber`,
`statusCode`); request bodies also accept the snake_case names.
"""

from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from domain.receipt import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NAME_PATTERN,
    SEATS_PER_SECTION,
    SURNAME_MAX_LENGTH,
    SURNAME_PATTERN,
    Receipt,
    Section,
    Station,
    UserSeat,
)

NAME_ERROR_MESSAGE = "The user name must start with uppercase and contain only alphabetic characters"
SURNAME_ERROR_MESSAGE = (
    "Each surname must start with uppercase and contain only alphabetic characters, "
    "up to two surnames separated by space"
)
SECTION_ERROR_MESSAGE = "The ticket section must be either A or B"
SEAT_NUMBER_ERROR_MESSAGE = f"The seat must be a number between 1 and {SEATS_PER_SECTION}"
EMAIL_LENGTH_ERROR_MESSAGE = f"The email must be at most {EMAIL_MAX_LENGTH} characters"


# ============================================================================
# Request Models
# ============================================================================

class PurchaseRequest(BaseModel):
    """Passenger details for a ticket purchase."""
    name: str = Field(..., max_length=NAME_MAX_LENGTH, description="The first name of the passenger")
    surname: str = Field(..., max_length=SURNAME_MAX_LENGTH, description="The surname of the passenger")
    email: EmailStr = Field(..., description="The email of the passenger")

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not NAME_PATTERN.match(value):
            raise ValueError(NAME_ERROR_MESSAGE)
        return value

    @field_validator("surname")
    @classmethod
    def _check_surname(cls, value: str) -> str:
        if not SURNAME_PATTERN.match(value):
            raise ValueError(SURNAME_ERROR_MESSAGE)
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _check_email_length(cls, value: Any) -> Any:
        if isinstance(value, str) and len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(EMAIL_LENGTH_ERROR_MESSAGE)
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "name": "John",
                "surname": "Doe",
                "email": "john.doe@example.com"
            }
        }


class SeatUpdateRequest(BaseModel):
    """Request to move a receipt to another seat."""
    id: int = Field(..., description="The unique identifier of the receipt")
    section: Section = Field(..., description="The section of the seat")
    seat_number: int = Field(..., alias="seatNumber", description="The seat number within the section")

    @field_validator("section", mode="before")
    @classmethod
    def _check_section(cls, value: Any) -> Any:
        if value not in (Section.A.value, Section.B.value):
            raise ValueError(SECTION_ERROR_MESSAGE)
        return value

    @field_validator("seat_number")
    @classmethod
    def _check_seat_number(cls, value: int) -> int:
        if not 1 <= value <= SEATS_PER_SECTION:
            raise ValueError(SEAT_NUMBER_ERROR_MESSAGE)
        return value

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "section": "A",
                "seatNumber": 5
            }
        }


# ============================================================================
# Receipt Models
# ============================================================================

class ReceiptResponse(BaseModel):
    """Receipt as returned by purchase and lookup."""
    id: Optional[int] = None
    origin: Station
    destination: Station
    price: Decimal
    name: str
    surname: str
    email: str
    section: Section
    seat_number: int = Field(..., alias="seatNumber")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "origin": "London",
                "destination": "France",
                "price": "20.00",
                "name": "John",
                "surname": "Doe",
                "email": "john.doe@example.com",
                "section": "A",
                "seatNumber": 1
            }
        }

    @classmethod
    def from_domain(cls, receipt: Receipt) -> "ReceiptResponse":
        return cls(
            id=receipt.receipt_id,
            origin=receipt.origin,
            destination=receipt.destination,
            price=receipt.price,
            name=receipt.name,
            surname=receipt.surname,
            email=receipt.email,
            section=receipt.section,
            seat_number=receipt.seat_number,
        )


class UserSeatResponse(BaseModel):
    """Passenger and seat, as listed per section."""
    name: str
    surname: str
    email: str
    section: Section
    seat_number: int = Field(..., alias="seatNumber")

    class Config:
        populate_by_name = True

    @classmethod
    def from_domain(cls, seat: UserSeat) -> "UserSeatResponse":
        return cls(
            name=seat.name,
            surname=seat.surname,
            email=seat.email,
            section=seat.section,
            seat_number=seat.seat_number,
        )


# ============================================================================
# Response Envelopes
# ============================================================================

class ApiResponse(BaseModel):
    """Generic response envelope shared by every endpoint."""
    status: str
    status_code: int = Field(..., alias="statusCode")
    message: str
    success: bool
    data: Optional[Any] = None

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "status": "OK",
                "statusCode": 200,
                "message": "Request successful",
                "success": True,
                "data": None
            }
        }


class ReceiptApiResponse(ApiResponse):
    data: Optional[ReceiptResponse] = None


class UserSeatListApiResponse(ApiResponse):
    data: Optional[List[UserSeatResponse]] = None


class ErrorResponse(ApiResponse):
    """Failure envelope; `error` is the stable error kind."""
    error: str

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "status": "Conflict",
                "statusCode": 409,
                "message": "No seats available on the train",
                "success": False,
                "data": None,
                "error": "NO_AVAILABLE_SEATS"
            }
        }
