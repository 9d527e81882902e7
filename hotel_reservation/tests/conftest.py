"""
Общие фикстуры для тестов системы бронирования.
"""

from decimal import Decimal
from functools import partial
from typing import Any, Dict, List, Tuple

import pytest

from hotel_reservation.booking.application import HotelContext, HotelReservationService
from hotel_reservation.booking.domain import Booking, BookingCreated
from hotel_reservation.booking.event_handlers import on_booking_created
from hotel_reservation.booking.infrastructure import (
    InMemoryBookingRepository,
    InMemoryEventBus,
    SimulatedPaymentGateway,
)
from hotel_reservation.shared_kernel import Money, RoomType

VALID_CNIC = "1234567890123"


class RecordingLogger:
    """Логгер, запоминающий все сообщения."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Dict[str, Any]]] = []

    def _record(self, level: str, message: str, kwargs: Dict[str, Any]) -> None:
        self.records.append((level, message, kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._record("info", message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._record("error", message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._record("warning", message, kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._record("debug", message, kwargs)

    def messages(self, level: str) -> List[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


def _make_booking(
    name: str = "Ali Khan",
    cnic: str = VALID_CNIC,
    room_number: int = 101,
    room_type: RoomType = RoomType.STANDARD,
    date: str = "15-06-2025",
    price: str = "5000",
) -> Booking:
    return Booking(
        customer_name=name,
        cnic=cnic,
        room_number=room_number,
        type=room_type,
        date=date,
        price=Money(amount=Decimal(price)),
    )


@pytest.fixture
def booking_factory():
    """Фабрика бронирований с данными по умолчанию."""
    return _make_booking


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def payments() -> List[str]:
    """Сообщения, переданные заглушкой платежного шлюза."""
    return []


@pytest.fixture
def repository() -> InMemoryBookingRepository:
    return InMemoryBookingRepository()


@pytest.fixture
def service(
    repository: InMemoryBookingRepository,
    logger: RecordingLogger,
    payments: List[str],
) -> HotelReservationService:
    """Сервис с каталогом по умолчанию, хранилищем в памяти и имитацией оплаты."""
    event_bus = InMemoryEventBus(logger=logger)
    gateway = SimulatedPaymentGateway(notify=payments.append, logger=logger)
    event_bus.subscribe(BookingCreated, partial(on_booking_created, gateway=gateway))
    return HotelReservationService(
        context=HotelContext.create(),
        repository=repository,
        event_bus=event_bus,
        logger=logger,
    )
