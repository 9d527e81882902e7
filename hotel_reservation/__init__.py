"""
Система бронирования номеров отеля.

Оператор просматривает номера, бронирует и отменяет бронирования,
смотрит историю по CNIC и фильтрует номера по цене. Журнал
бронирований сохраняется в локальный файл между запусками.
"""

__version__ = "0.1.0"
