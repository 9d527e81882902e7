"""
Основные доменные типы и утилиты общего ядра.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidType

DEFAULT_CURRENCY = "PKR"


class Money(BaseModel):
    """Денежная сумма с валютой."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(..., ge=0, description="Сумма денег")
    currency: str = Field(
        default=DEFAULT_CURRENCY, max_length=3, description="Код валюты (ISO 4217)"
    )

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"


class RoomType(str, Enum):
    """Типы номеров в отеле."""

    STANDARD = "Standard"
    DELUXE = "Deluxe"
    SUITE = "Suite"

    @classmethod
    def parse(cls, value: str) -> "RoomType":
        """Находит тип номера по названию без учета регистра."""
        normalized = (value or "").strip().lower()
        for room_type in cls:
            if room_type.value.lower() == normalized:
                return room_type
        raise InvalidType(
            f"Неизвестный тип номера: {value!r}. "
            f"Допустимые типы: {', '.join(t.value for t in cls)}"
        )

    def matches(self, value: str) -> bool:
        """Сравнивает тип с произвольной строкой без учета регистра."""
        return self.value.lower() == (value or "").strip().lower()


class DomainEvent(BaseModel):
    """Базовый класс для всех доменных событий."""

    event_id: UUID = Field(default_factory=uuid4)
    occurred_on: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def event_type(self) -> str:
        return type(self).__name__
