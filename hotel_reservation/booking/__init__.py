"""
Модуль контекста бронирования (Booking Context).

Отвечает за бронирование номеров отеля, включая:
- Каталог номеров и проверку доступности
- Создание и отмену бронирований
- Сохранение журнала бронирований между запусками
"""

from . import application, domain, event_handlers, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "event_handlers",
    "infrastructure",
    "interfaces",
]
