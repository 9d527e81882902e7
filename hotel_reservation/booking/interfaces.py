"""
Интерфейсы (порты) для контекста бронирования.
"""

from __future__ import annotations

from typing import Any, Callable, List, Protocol, Sequence, Type, TypeVar

from ..shared_kernel import DomainEvent, Money
from .domain import Booking

T_Event = TypeVar("T_Event", bound=DomainEvent)


class ILogger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class IEventBus(Protocol):
    """Интерфейс для шины событий."""

    def publish(self, event: DomainEvent) -> None: ...
    def subscribe(
        self, event_type: Type[T_Event], handler: Callable[[T_Event], None]
    ) -> None: ...


class IBookingRepository(Protocol):
    """Интерфейс хранилища бронирований.

    Хранилище работает со списком целиком: загружает его при старте
    и перезаписывает при сохранении.
    """

    def load(self) -> List[Booking]: ...
    def save(self, bookings: Sequence[Booking]) -> None: ...


class IPaymentGateway(Protocol):
    """Интерфейс платежного шлюза."""

    def simulate_payment(self, amount: Money) -> None: ...
