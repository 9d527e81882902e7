"""
Настройки приложения.
"""

from pathlib import Path

from pydantic import BaseModel, Field

from .shared_kernel import DEFAULT_CURRENCY


class Settings(BaseModel):
    """Настройки приложения бронирования."""

    bookings_file: Path = Field(
        default=Path("bookings.json"), description="Файл журнала бронирований"
    )
    currency: str = Field(
        default=DEFAULT_CURRENCY, max_length=3, description="Код валюты (ISO 4217)"
    )
    debug: bool = Field(default=False, description="Выводить отладочные сообщения")
