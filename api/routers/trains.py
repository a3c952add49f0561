"""
Train Ticketing API Endpoints.

Endpoints for purchasing tickets and managing receipts. Handlers only parse
input, call the ticketing service and wrap results in the response envelope;
domain errors are mapped to status codes in api.errors.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends

from api.dependencies import get_ticketing_service
from api.models import (
    ApiResponse,
    ErrorResponse,
    PurchaseRequest,
    ReceiptApiResponse,
    ReceiptResponse,
    SeatUpdateRequest,
    UserSeatListApiResponse,
    UserSeatResponse,
)
from domain.receipt import Passenger, Section
from services.ticketing_service import TicketingService

router = APIRouter()


def _envelope(model: type[ApiResponse], status: HTTPStatus, message: str, data=None) -> ApiResponse:
    return model(
        status=status.phrase,
        status_code=status.value,
        message=message,
        success=True,
        data=data,
    )


@router.post(
    "/purchase",
    response_model=ReceiptApiResponse,
    status_code=HTTPStatus.CREATED,
    summary="Purchase a ticket",
    description="Handles the purchase of a ticket and returns a receipt.",
    responses={
        409: {"model": ErrorResponse, "description": "No available seats"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
def purchase_ticket(
    request: PurchaseRequest,
    service: TicketingService = Depends(get_ticketing_service),
):
    """
    Purchase a London to France ticket for a passenger.

    The seat is assigned automatically: the section with fewer passengers
    (A when the train is empty) and the lowest free seat number within it.

    **Example request:**
    ```json
    {"name": "John", "surname": "Doe", "email": "john.doe@example.com"}
    ```
    """
    receipt = service.purchase_ticket(
        Passenger(name=request.name, surname=request.surname, email=str(request.email))
    )

    return _envelope(
        ReceiptApiResponse,
        HTTPStatus.CREATED,
        "Receipt created successfully",
        ReceiptResponse.from_domain(receipt),
    )


@router.delete(
    "/delete/{receipt_id}",
    response_model=ApiResponse,
    summary="Delete a receipt",
    description="Deletes a receipt by its ID.",
    responses={
        404: {"model": ErrorResponse, "description": "Receipt not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
def delete_receipt(
    receipt_id: int,
    service: TicketingService = Depends(get_ticketing_service),
):
    """Delete a receipt, freeing its seat."""
    service.delete_receipt(receipt_id)
    return _envelope(ApiResponse, HTTPStatus.OK, "Receipt deleted successfully")


@router.put(
    "/update-seat",
    response_model=ApiResponse,
    summary="Update a receipt's seat",
    description="Moves a receipt to another section and seat number.",
    responses={
        404: {"model": ErrorResponse, "description": "Receipt not found"},
        409: {"model": ErrorResponse, "description": "Seat already occupied"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
def update_seat(
    request: SeatUpdateRequest,
    service: TicketingService = Depends(get_ticketing_service),
):
    """
    Move a receipt to another seat.

    Only section and seat number change; passenger and trip details are kept.

    **Example request:**
    ```json
    {"id": 1, "section": "B", "seatNumber": 5}
    ```
    """
    service.update_seat(request.id, request.section, request.seat_number)
    return _envelope(ApiResponse, HTTPStatus.OK, "Seat updated successfully")


@router.get(
    "/receipts/section/{section}",
    response_model=UserSeatListApiResponse,
    summary="List receipts by section",
    description="Returns the passengers and seats of a section.",
    responses={
        404: {"model": ErrorResponse, "description": "No receipts found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
def get_receipts_by_section(
    section: Section,
    service: TicketingService = Depends(get_ticketing_service),
):
    """List every passenger seated in section A or B."""
    seats = service.get_receipts_by_section(section)
    return _envelope(
        UserSeatListApiResponse,
        HTTPStatus.OK,
        "Receipts retrieved successfully",
        [UserSeatResponse.from_domain(seat) for seat in seats],
    )


@router.get(
    "/receipt/{receipt_id}",
    response_model=ReceiptApiResponse,
    summary="Get a receipt",
    description="Returns a receipt by its ID.",
    responses={
        404: {"model": ErrorResponse, "description": "Receipt not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
def get_receipt_by_id(
    receipt_id: int,
    service: TicketingService = Depends(get_ticketing_service),
):
    """Fetch a single receipt."""
    receipt = service.get_receipt_by_id(receipt_id)
    return _envelope(
        ReceiptApiResponse,
        HTTPStatus.OK,
        "Receipt retrieved successfully",
        ReceiptResponse.from_domain(receipt),
    )
