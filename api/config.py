"""
Application settings.

Read from the environment (and the project's .env file) once at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from repositories.receipt_repository import DEFAULT_RECEIPTS_TABLE

env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

RECEIPT_STORES = ("supabase", "memory")


@dataclass(frozen=True, slots=True)
class Settings:
    receipt_store: str = "supabase"
    receipts_table: str = DEFAULT_RECEIPTS_TABLE
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> "Settings":
        receipt_store = os.getenv("RECEIPT_STORE", "supabase").strip().lower()
        if receipt_store not in RECEIPT_STORES:
            raise RuntimeError(
                f"Invalid RECEIPT_STORE: {receipt_store!r}. "
                f"Expected one of: {', '.join(RECEIPT_STORES)}."
            )

        origins: List[str] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]

        return cls(
            receipt_store=receipt_store,
            receipts_table=os.getenv("RECEIPTS_TABLE", DEFAULT_RECEIPTS_TABLE),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=tuple(origins) or ("*",),
        )


__all__ = ["Settings"]
