"""
Прикладной слой контекста бронирования.

Содержит сервис приложения, который координирует взаимодействие
между слоем взаимодействия с оператором и доменной моделью.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Union

from ..shared_kernel import DEFAULT_CURRENCY, NoRoomAvailable, NotFound
from . import interfaces as ports
from .domain import (
    Booking,
    BookingCancelled,
    BookingCreated,
    BookingLedger,
    BookingPolicy,
    Inventory,
    Room,
)


@dataclass
class HotelContext:
    """Владелец изменяемого состояния: каталога номеров и журнала бронирований."""

    inventory: Inventory
    ledger: BookingLedger = field(default_factory=BookingLedger)

    @classmethod
    def create(cls, currency: str = DEFAULT_CURRENCY) -> "HotelContext":
        return cls(inventory=Inventory.initialize(currency=currency))


class HotelReservationService:
    """Сервис приложения для работы с номерами и бронированиями."""

    def __init__(
        self,
        context: HotelContext,
        repository: ports.IBookingRepository,
        event_bus: ports.IEventBus,
        logger: ports.ILogger,
    ):
        """Инициализирует сервис."""
        self._context = context
        self._repository = repository
        self._event_bus = event_bus
        self._logger = logger

    @property
    def context(self) -> HotelContext:
        return self._context

    # Хранение

    def load(self) -> List[Booking]:
        """Загружает журнал из хранилища и синхронизирует с ним каталог."""
        bookings = self._repository.load()
        inventory = self._context.inventory

        self._context.ledger.replace_all(bookings)
        for room in inventory.list_all():
            room.mark_available()

        seen_rooms = set()
        for booking in bookings:
            if booking.room_number in seen_rooms:
                self._logger.warning(
                    "Several loaded bookings reference the same room",
                    room_number=booking.room_number,
                    customer_name=booking.customer_name,
                )
            seen_rooms.add(booking.room_number)

            if not inventory.mark_booked(booking.room_number, booking.date):
                self._logger.debug(
                    "Loaded booking references an unknown room",
                    room_number=booking.room_number,
                    customer_name=booking.customer_name,
                )

        self._logger.info("Bookings loaded", count=len(bookings))
        return self._context.ledger.list_all()

    def save(self) -> None:
        """Сохраняет журнал целиком.

        PersistenceWriteFailure пробрасывается вызывающему;
        состояние в памяти при этом не откатывается.
        """
        bookings = self._context.ledger.list_all()
        self._repository.save(bookings)
        self._logger.info("Bookings saved", count=len(bookings))

    # Бронирование

    def book(self, customer_name: str, cnic: str, room_type: str, date: str) -> Booking:
        """Бронирует первый свободный номер указанного типа.

        Все проверки выполняются до изменения состояния: при ошибке
        не меняются ни каталог, ни журнал.
        """
        request = BookingPolicy.validate_request(customer_name, cnic, room_type, date)

        room = self._context.inventory.find_first_available_by_type(
            request.room_type.value
        )
        if room is None:
            raise NoRoomAvailable(
                f"Нет свободных номеров типа {request.room_type.value}"
            )

        booking = Booking.create(
            room=room,
            customer_name=request.customer_name,
            cnic=request.cnic,
            date=request.date,
        )

        self._context.inventory.mark_booked(room.room_number, request.date)
        self._context.ledger.add(booking)

        self._logger.info(
            "Room booked",
            room_number=booking.room_number,
            customer_name=booking.customer_name,
            date=booking.date,
        )
        self._event_bus.publish(
            BookingCreated(
                customer_name=booking.customer_name,
                room_number=booking.room_number,
                price=booking.price,
            )
        )
        return booking

    def cancel(self, customer_name: str) -> Booking:
        """Отменяет первое бронирование клиента с указанным именем.

        Имя сравнивается без учета регистра; CNIC не проверяется.
        """
        ledger = self._context.ledger
        booking = ledger.find_first_by_name(customer_name or "")
        if booking is None:
            raise NotFound(f"Бронирование на имя {customer_name!r} не найдено")

        ledger.remove(booking)
        if ledger.references_room(booking.room_number):
            self._logger.warning(
                "Room stays booked by another booking",
                room_number=booking.room_number,
            )
        elif not self._context.inventory.mark_available(booking.room_number):
            self._logger.debug(
                "Cancelled booking references an unknown room",
                room_number=booking.room_number,
            )

        self._logger.info(
            "Booking cancelled",
            room_number=booking.room_number,
            customer_name=booking.customer_name,
        )
        self._event_bus.publish(
            BookingCancelled(
                customer_name=booking.customer_name,
                room_number=booking.room_number,
            )
        )
        return booking

    # Запросы

    def list_available_rooms(self) -> List[Room]:
        return self._context.inventory.list_available()

    def list_rooms_by_price_range(
        self,
        min_price: Union[str, int, float, Decimal],
        max_price: Union[str, int, float, Decimal],
    ) -> List[Room]:
        return self._context.inventory.list_by_price_range(min_price, max_price)

    def list_bookings(self) -> List[Booking]:
        return self._context.ledger.list_all()

    def list_bookings_by_cnic(self, cnic: str) -> List[Booking]:
        return self._context.ledger.list_by_cnic(cnic)
