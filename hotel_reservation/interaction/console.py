"""
Консольное меню оператора.

Ввод и вывод передаются снаружи (prompt, output), поэтому меню
можно прогонять в тестах без терминала.
"""

from typing import Callable, Optional

from ..booking.application import HotelReservationService
from ..booking.infrastructure import ConsoleLogger
from ..booking.interfaces import ILogger
from ..shared_kernel import (
    HotelReservationError,
    PersistenceWriteFailure,
    RoomType,
)
from .reports import bookings_report, rooms_report

MENU = (
    ("1", "Просмотр свободных номеров"),
    ("2", "Забронировать номер"),
    ("3", "Отменить бронирование"),
    ("4", "Все бронирования"),
    ("5", "История бронирований по CNIC"),
    ("6", "Фильтр по цене"),
    ("7", "Сохранить"),
    ("0", "Выход"),
)
EXIT_CHOICE = "0"


class ConsoleApp:
    """Цикл запрос-ответ поверх сервиса бронирования."""

    def __init__(
        self,
        service: HotelReservationService,
        prompt: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        logger: Optional[ILogger] = None,
    ):
        self._service = service
        self._prompt = prompt
        self._output = output
        self._logger = logger or ConsoleLogger()
        self._actions = {
            "1": self.view_available_rooms,
            "2": self.book_room,
            "3": self.cancel_booking,
            "4": self.view_bookings,
            "5": self.booking_history_by_cnic,
            "6": self.filter_rooms_by_price,
            "7": self.save,
        }

    def menu_text(self) -> str:
        lines = ["=== Система бронирования отеля ==="]
        lines.extend(f"{key}. {title}" for key, title in MENU)
        return "\n".join(lines)

    def run(self) -> None:
        """Показывает меню до выбора выхода или конца ввода, затем сохраняет журнал."""
        while True:
            self._output(self.menu_text())
            try:
                choice = self._prompt("Выберите действие: ").strip()
            except EOFError:
                break

            if choice == EXIT_CHOICE:
                break

            action = self._actions.get(choice)
            if action is None:
                self._output(f"Неизвестное действие: {choice!r}")
                continue

            try:
                self._output(action())
            except EOFError:
                break

        self._output(self.save())

    def view_available_rooms(self) -> str:
        return rooms_report("Свободные номера", self._service.list_available_rooms())

    def book_room(self) -> str:
        name = self._prompt("Введите имя: ")
        cnic = self._prompt("Введите CNIC (13 цифр): ")
        room_type = self._prompt(
            f"Тип номера ({'/'.join(t.value for t in RoomType)}): "
        )
        date = self._prompt("Дата (например, 15-06-2025): ")
        try:
            booking = self._service.book(name, cnic, room_type, date)
        except HotelReservationError as e:
            return str(e)
        return f"Номер {booking.room_number} успешно забронирован!"

    def cancel_booking(self) -> str:
        name = self._prompt("Введите имя: ")
        try:
            booking = self._service.cancel(name)
        except HotelReservationError as e:
            return str(e)
        return f"Бронирование номера {booking.room_number} отменено."

    def view_bookings(self) -> str:
        return bookings_report("Все бронирования", self._service.list_bookings())

    def booking_history_by_cnic(self) -> str:
        cnic = self._prompt("Введите CNIC: ").strip()
        bookings = self._service.list_bookings_by_cnic(cnic)
        if not bookings:
            return f"Бронирования с CNIC {cnic} не найдены."
        return bookings_report("История бронирований", bookings)

    def filter_rooms_by_price(self) -> str:
        min_price = self._prompt("Минимальная цена: ")
        max_price = self._prompt("Максимальная цена: ")
        try:
            rooms = self._service.list_rooms_by_price_range(min_price, max_price)
        except HotelReservationError as e:
            return str(e)
        return rooms_report("Номера в ценовом диапазоне", rooms)

    def save(self) -> str:
        try:
            self._service.save()
        except PersistenceWriteFailure as e:
            self._logger.warning("Save failed", error=str(e))
            return f"Предупреждение: {e}"
        return "Бронирования сохранены."
