from .domain import BookingCreated
from .interfaces import IPaymentGateway


def on_booking_created(event: BookingCreated, gateway: IPaymentGateway) -> None:
    """Обработчик события создания бронирования: имитирует оплату."""
    gateway.simulate_payment(event.price)
