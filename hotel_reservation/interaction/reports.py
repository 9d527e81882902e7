"""
Текстовые отчеты по номерам и бронированиям.
"""

from typing import Iterable

from ..booking.domain import Booking, Room

EMPTY_MARKER = "(нет записей)"


def format_room(room: Room) -> str:
    line = f"Номер {room.room_number} - {room.type.value} - {room.price}"
    if room.is_booked:
        line += f" (забронирован на {room.booking_date})"
    return line


def format_booking(booking: Booking) -> str:
    return (
        f"{booking.customer_name} (CNIC: {booking.cnic}) - "
        f"Номер {booking.room_number} ({booking.type.value}) "
        f"на {booking.date} - {booking.price}"
    )


def _report(title: str, lines: Iterable[str]) -> str:
    body = list(lines) or [EMPTY_MARKER]
    return "\n".join([f"--- {title} ---", *body])


def rooms_report(title: str, rooms: Iterable[Room]) -> str:
    return _report(title, (format_room(room) for room in rooms))


def bookings_report(title: str, bookings: Iterable[Booking]) -> str:
    return _report(title, (format_booking(booking) for booking in bookings))
