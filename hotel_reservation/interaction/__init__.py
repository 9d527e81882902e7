"""
Слой взаимодействия с оператором: текстовые отчеты и консольное меню.
"""

from .console import ConsoleApp
from .reports import bookings_report, format_booking, format_room, rooms_report

__all__ = [
    "ConsoleApp",
    "bookings_report",
    "format_booking",
    "format_room",
    "rooms_report",
]
