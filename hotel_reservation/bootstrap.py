from functools import partial
from typing import Any, Callable, Dict, Optional

from .booking.application import HotelContext, HotelReservationService
from .booking.domain import BookingCreated
from .booking.event_handlers import on_booking_created
from .booking.infrastructure import (
    ConsoleLogger,
    InMemoryEventBus,
    JsonFileBookingRepository,
    SimulatedPaymentGateway,
)
from .config import Settings


def bootstrap_app(
    settings: Optional[Settings] = None,
    notify: Optional[Callable[[str], None]] = None,
) -> Dict[str, Any]:
    """Создает и настраивает все компоненты приложения."""
    settings = settings or Settings()
    logger = ConsoleLogger(debug=settings.debug)

    # 1. Создаем контекст с каталогом номеров и пустым журналом
    context = HotelContext.create(currency=settings.currency)

    # 2. Создаем инфраструктуру
    repository = JsonFileBookingRepository(settings.bookings_file, logger=logger)
    event_bus = InMemoryEventBus(logger=logger)
    payment_gateway = SimulatedPaymentGateway(notify=notify, logger=logger)

    # 3. Подписываем обработчики на события
    handler = partial(on_booking_created, gateway=payment_gateway)
    event_bus.subscribe(BookingCreated, handler)

    # 4. Создаем сервис и загружаем сохраненные бронирования
    service = HotelReservationService(
        context=context,
        repository=repository,
        event_bus=event_bus,
        logger=logger,
    )
    service.load()

    return {
        "settings": settings,
        "service": service,
        "payment_gateway": payment_gateway,
        "logger": logger,
    }
