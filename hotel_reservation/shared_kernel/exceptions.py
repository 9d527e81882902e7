"""
Иерархия исключений системы бронирования.

Все исключения несут сообщение, пригодное для показа оператору.
"""


class HotelReservationError(Exception):
    """Базовое исключение приложения."""

    pass


class DomainException(HotelReservationError):
    """Базовое исключение для доменных ошибок."""

    pass


class ValidationError(DomainException):
    """Некорректные входные данные."""

    pass


class InvalidName(ValidationError):
    """Пустое имя клиента."""

    pass


class InvalidCNIC(ValidationError):
    """CNIC не состоит ровно из 13 цифр."""

    pass


class InvalidDate(ValidationError):
    """Дата не в формате ДД-ММ-ГГГГ."""

    pass


class InvalidType(ValidationError):
    """Тип номера не входит в каталог."""

    pass


class InvalidInput(ValidationError):
    """Границы ценового фильтра не являются неотрицательными числами."""

    pass


class BusinessRuleValidationException(DomainException):
    """Исключение при нарушении бизнес-правил."""

    pass


class NoRoomAvailable(BusinessRuleValidationException):
    """Свободных номеров запрошенного типа нет."""

    pass


class NotFound(BusinessRuleValidationException):
    """Бронирование не найдено."""

    pass


class InfrastructureException(HotelReservationError):
    """Базовое исключение инфраструктурного слоя."""

    pass


class PersistenceWriteFailure(InfrastructureException):
    """Не удалось сохранить бронирования в файл."""

    pass
