"""
Доменная модель контекста бронирования.

Содержит номера, бронирования, каталог номеров (Inventory),
журнал бронирований (BookingLedger) и правила проверки входных данных.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from ..shared_kernel import (
    DEFAULT_CURRENCY,
    DomainEvent,
    InvalidCNIC,
    InvalidDate,
    InvalidInput,
    InvalidName,
    Money,
    NoRoomAvailable,
    RoomType,
)

CNIC_REGEX = r"^[0-9]{13}$"
DATE_REGEX = r"^[0-9]{2}-[0-9]{2}-[0-9]{4}$"
CNIC_PATTERN = re.compile(CNIC_REGEX)
DATE_PATTERN = re.compile(DATE_REGEX)

# Номер, тип, цена за ночь
CATALOG: Tuple[Tuple[int, RoomType, Decimal], ...] = (
    (101, RoomType.STANDARD, Decimal("5000")),
    (102, RoomType.STANDARD, Decimal("5000")),
    (201, RoomType.DELUXE, Decimal("8000")),
    (202, RoomType.DELUXE, Decimal("8000")),
    (301, RoomType.SUITE, Decimal("12000")),
    (302, RoomType.SUITE, Decimal("12000")),
)


class Room(BaseModel):
    """Номер в отеле."""

    room_number: int
    type: RoomType
    price: Money
    is_booked: bool = False
    booking_date: str = ""

    def mark_booked(self, date: str) -> None:
        self.is_booked = True
        self.booking_date = date

    def mark_available(self) -> None:
        self.is_booked = False
        self.booking_date = ""


class Booking(BaseModel):
    """Бронирование номера.

    Тип и цена копируются из номера в момент бронирования и дальше
    от номера не зависят.
    """

    customer_name: str = Field(..., pattern=r"\S")
    cnic: str = Field(..., pattern=CNIC_REGEX)
    room_number: int
    type: RoomType
    date: str = Field(..., pattern=DATE_REGEX)
    price: Money

    @classmethod
    def create(cls, room: Room, customer_name: str, cnic: str, date: str) -> "Booking":
        """Создает бронирование свободного номера."""
        if room.is_booked:
            raise NoRoomAvailable(f"Номер {room.room_number} уже забронирован")

        return cls(
            customer_name=customer_name,
            cnic=cnic,
            room_number=room.room_number,
            type=room.type,
            date=date,
            price=room.price,
        )

    def belongs_to(self, customer_name: str) -> bool:
        """Проверяет имя клиента без учета регистра."""
        return self.customer_name.strip().lower() == customer_name.strip().lower()


class BookingCreated(DomainEvent):
    """Событие создания бронирования."""

    customer_name: str
    room_number: int
    price: Money


class BookingCancelled(DomainEvent):
    """Событие отмены бронирования."""

    customer_name: str
    room_number: int


class BookingRequest(BaseModel):
    """Проверенный запрос на бронирование."""

    customer_name: str
    cnic: str
    room_type: RoomType
    date: str


class BookingPolicy:
    """Правила проверки входных данных бронирования."""

    @staticmethod
    def validate_customer_name(customer_name: Optional[str]) -> str:
        name = (customer_name or "").strip()
        if not name:
            raise InvalidName("Имя клиента не может быть пустым")
        return name

    @staticmethod
    def validate_cnic(cnic: Optional[str]) -> str:
        value = (cnic or "").strip()
        if not CNIC_PATTERN.fullmatch(value):
            raise InvalidCNIC(f"CNIC должен состоять ровно из 13 цифр: {cnic!r}")
        return value

    @staticmethod
    def validate_date(date: Optional[str]) -> str:
        # Проверяется только формат, календарная корректность не проверяется
        value = (date or "").strip()
        if not DATE_PATTERN.fullmatch(value):
            raise InvalidDate(f"Дата должна быть в формате ДД-ММ-ГГГГ: {date!r}")
        return value

    @classmethod
    def validate_request(
        cls,
        customer_name: Optional[str],
        cnic: Optional[str],
        room_type: Optional[str],
        date: Optional[str],
    ) -> BookingRequest:
        """Проверяет все поля запроса по порядку: имя, CNIC, дата, тип."""
        name = cls.validate_customer_name(customer_name)
        checked_cnic = cls.validate_cnic(cnic)
        checked_date = cls.validate_date(date)
        parsed_type = RoomType.parse(room_type or "")
        return BookingRequest(
            customer_name=name,
            cnic=checked_cnic,
            room_type=parsed_type,
            date=checked_date,
        )


def parse_price_bound(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """Разбирает границу ценового фильтра как неотрицательное число."""
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidInput(f"Некорректная граница цены: {value!r}")

    if not amount.is_finite() or amount < 0:
        raise InvalidInput(f"Граница цены должна быть неотрицательным числом: {value!r}")
    return amount


class Inventory:
    """Каталог номеров отеля.

    Порядок номеров фиксирован порядком каталога, все запросы
    возвращают номера в этом порядке.
    """

    def __init__(self, rooms: Iterable[Room] = ()):
        self._rooms: List[Room] = list(rooms)

    @classmethod
    def initialize(cls, currency: str = DEFAULT_CURRENCY) -> "Inventory":
        """Создает каталог с фиксированным набором номеров."""
        return cls(
            Room(
                room_number=number,
                type=room_type,
                price=Money(amount=price, currency=currency),
            )
            for number, room_type, price in CATALOG
        )

    def __len__(self) -> int:
        return len(self._rooms)

    def get(self, room_number: int) -> Optional[Room]:
        for room in self._rooms:
            if room.room_number == room_number:
                return room
        return None

    def list_all(self) -> List[Room]:
        return list(self._rooms)

    def list_available(self) -> List[Room]:
        return [room for room in self._rooms if not room.is_booked]

    def list_by_price_range(
        self,
        min_price: Union[str, int, float, Decimal],
        max_price: Union[str, int, float, Decimal],
    ) -> List[Room]:
        """Свободные номера с ценой в диапазоне [min_price, max_price].

        Если min_price > max_price, результат пустой.
        """
        low = parse_price_bound(min_price)
        high = parse_price_bound(max_price)
        return [
            room
            for room in self.list_available()
            if low <= room.price.amount <= high
        ]

    def find_first_available_by_type(self, room_type: str) -> Optional[Room]:
        for room in self._rooms:
            if not room.is_booked and room.type.matches(room_type):
                return room
        return None

    def mark_booked(self, room_number: int, date: str) -> bool:
        """Помечает номер занятым.

        Отсутствующий номер молча игнорируется; возвращает False,
        если номер не найден.
        """
        room = self.get(room_number)
        if room is None:
            return False
        room.mark_booked(date)
        return True

    def mark_available(self, room_number: int) -> bool:
        """Освобождает номер. Отсутствующий номер молча игнорируется."""
        room = self.get(room_number)
        if room is None:
            return False
        room.mark_available()
        return True


class BookingLedger:
    """Журнал активных бронирований в порядке добавления."""

    def __init__(self, bookings: Iterable[Booking] = ()):
        self._bookings: List[Booking] = list(bookings)

    def __len__(self) -> int:
        return len(self._bookings)

    def add(self, booking: Booking) -> None:
        self._bookings.append(booking)

    def replace_all(self, bookings: Iterable[Booking]) -> None:
        self._bookings = list(bookings)

    def find_first_by_name(self, customer_name: str) -> Optional[Booking]:
        for booking in self._bookings:
            if booking.belongs_to(customer_name):
                return booking
        return None

    def remove(self, booking: Booking) -> None:
        # Удаляем именно этот объект, а не первый равный ему
        for index, candidate in enumerate(self._bookings):
            if candidate is booking:
                del self._bookings[index]
                return
        raise ValueError("Бронирование отсутствует в журнале")

    def references_room(self, room_number: int) -> bool:
        return any(b.room_number == room_number for b in self._bookings)

    def list_all(self) -> List[Booking]:
        return list(self._bookings)

    def list_by_cnic(self, cnic: str) -> List[Booking]:
        return [booking for booking in self._bookings if booking.cnic == cnic]
