"""
FastAPI dependencies.

The ticketing service is built once at startup (see api.main lifespan) and
stored on app.state; endpoints receive it through `get_ticketing_service`.
"""

from __future__ import annotations

import logging

from fastapi import Request

from api.config import Settings
from repositories.memory_receipt_repository import InMemoryReceiptRepository
from repositories.receipt_repository import ReceiptRepository, SupabaseReceiptRepository
from services.ticketing_service import TicketingService

logger = logging.getLogger(__name__)


def build_receipt_repository(settings: Settings) -> ReceiptRepository:
    """Create the receipt store selected by RECEIPT_STORE."""

    if settings.receipt_store == "memory":
        logger.info("Using in-memory receipt store")
        return InMemoryReceiptRepository()

    from repositories.client import get_supabase_client

    logger.info("Using Supabase receipt store (table=%s)", settings.receipts_table)
    return SupabaseReceiptRepository(get_supabase_client(), table=settings.receipts_table)


def build_ticketing_service(settings: Settings) -> TicketingService:
    return TicketingService(build_receipt_repository(settings))


def get_ticketing_service(request: Request) -> TicketingService:
    service = getattr(request.app.state, "ticketing_service", None)
    if service is None:
        raise RuntimeError("Ticketing service not initialized. Please check application startup.")
    return service


__all__ = ["build_receipt_repository", "build_ticketing_service", "get_ticketing_service"]
