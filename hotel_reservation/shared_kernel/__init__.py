"""
Общее ядро (Shared Kernel) системы бронирования.

Содержит общие типы данных и исключения.
"""

from .domain import (
    DEFAULT_CURRENCY,
    DomainEvent,
    Money,
    RoomType,
)
from .exceptions import (
    BusinessRuleValidationException,
    DomainException,
    HotelReservationError,
    InfrastructureException,
    InvalidCNIC,
    InvalidDate,
    InvalidInput,
    InvalidName,
    InvalidType,
    NoRoomAvailable,
    NotFound,
    PersistenceWriteFailure,
    ValidationError,
)

__all__ = [
    # Основные классы
    "DEFAULT_CURRENCY",
    "Money",
    "RoomType",
    "DomainEvent",
    # Исключения
    "HotelReservationError",
    "DomainException",
    "ValidationError",
    "InvalidName",
    "InvalidCNIC",
    "InvalidDate",
    "InvalidType",
    "InvalidInput",
    "BusinessRuleValidationException",
    "NoRoomAvailable",
    "NotFound",
    "InfrastructureException",
    "PersistenceWriteFailure",
]
