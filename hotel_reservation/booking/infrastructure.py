"""
Инфраструктурный слой контекста бронирования.

Содержит реализации хранилищ и других интерфейсов,
зависимые от конкретных технологий (файлы, консоль и т.д.).
"""

import json
import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Type, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..shared_kernel import DomainEvent, Money, PersistenceWriteFailure
from . import interfaces as ports
from .domain import Booking

_BOOKING_LIST = TypeAdapter(List[Booking])


class JsonFileBookingRepository(ports.IBookingRepository):
    """Хранилище бронирований в JSON-файле."""

    def __init__(self, file_path: Union[str, Path], logger: Optional[ports.ILogger] = None):
        """
        Инициализирует хранилище.

        Args:
            file_path: Путь к JSON-файлу с бронированиями
            logger: Логгер для сообщений о загрузке и сохранении
        """
        self._file_path = Path(file_path)
        self._logger = logger or ConsoleLogger()

    def load(self) -> List[Booking]:
        """Загружает бронирования из JSON-файла.

        Ошибки чтения не пробрасываются: отсутствующий, нечитаемый
        или поврежденный файл дает пустой список. Поврежденный
        и нечитаемый файл дополнительно отмечаются предупреждением.
        """
        if not self._file_path.exists():
            self._logger.debug(
                "Файл бронирований не найден, начинаем с пустого журнала",
                path=str(self._file_path),
            )
            return []

        try:
            raw_data = self._file_path.read_bytes()
        except OSError as e:
            self._logger.warning(
                "Не удалось прочитать файл бронирований",
                path=str(self._file_path),
                error=str(e),
            )
            return []

        if not raw_data.strip():
            return []

        try:
            return _BOOKING_LIST.validate_json(raw_data)
        except PydanticValidationError as e:
            self._logger.warning(
                "Файл бронирований поврежден, начинаем с пустого журнала",
                path=str(self._file_path),
                error=str(e),
            )
            return []

    def save(self, bookings: Sequence[Booking]) -> None:
        """Сохраняет все бронирования, перезаписывая файл.

        Данные пишутся во временный файл рядом с целевым, который
        затем переименовывается поверх него. Права доступа целевого
        файла сохраняются.
        """
        data = _BOOKING_LIST.dump_json(list(bookings), indent=2)
        tmp_name = None
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=self._file_path.parent,
                prefix=f".{self._file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, self._target_mode())
            os.replace(tmp_name, self._file_path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceWriteFailure(
                f"Не удалось сохранить бронирования в {self._file_path}: {e}"
            ) from e

    def _target_mode(self) -> int:
        """Права существующего файла или права нового файла с учетом umask."""
        try:
            return stat.S_IMODE(os.stat(self._file_path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask


class InMemoryBookingRepository(ports.IBookingRepository):
    """Реализация хранилища бронирований в памяти."""

    def __init__(self, bookings: Sequence[Booking] = ()):
        self._bookings: List[Booking] = [b.model_copy(deep=True) for b in bookings]
        self.save_count = 0

    def load(self) -> List[Booking]:
        return [b.model_copy(deep=True) for b in self._bookings]

    def save(self, bookings: Sequence[Booking]) -> None:
        self._bookings = [b.model_copy(deep=True) for b in bookings]
        self.save_count += 1


class ConsoleLogger(ports.ILogger):
    """Простая реализация логгера, выводящая сообщения в stderr."""

    def __init__(self, debug: bool = False, stream=None):
        self._debug = debug
        self._stream = stream

    def _write(self, level: str, message: str, context: Dict) -> None:
        stream = self._stream or sys.stderr
        print(f"[{level}] {message}", file=stream, flush=True)
        if context:
            print(
                "  Context:",
                json.dumps(context, default=str, indent=2, ensure_ascii=False),
                file=stream,
                flush=True,
            )

    def info(self, message: str, **kwargs) -> None:
        self._write("INFO", message, kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._write("ERROR", message, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._write("WARNING", message, kwargs)

    def debug(self, message: str, **kwargs) -> None:
        if self._debug:
            self._write("DEBUG", message, kwargs)


class InMemoryEventBus(ports.IEventBus):
    """Реализация шины событий в памяти."""

    def __init__(self, logger: Optional[ports.ILogger] = None):
        self._subscribers: Dict[Type[DomainEvent], list] = {}
        self._logger = logger or ConsoleLogger()

    def publish(self, event: DomainEvent) -> None:
        """Публикует событие."""
        event_type = type(event)
        if event_type not in self._subscribers:
            self._logger.debug(f"No subscribers for event type {event.event_type}")
            return

        self._logger.debug(
            f"Publishing event: {event.event_type}", event=event.model_dump(mode="json")
        )

        for handler in self._subscribers[event_type]:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(
                    f"Error in event handler for {event.event_type}",
                    error=str(e),
                    event=event.model_dump(mode="json"),
                )

    def subscribe(self, event_type: Type[DomainEvent], handler) -> None:
        """Подписывает обработчик на события указанного типа."""
        self._subscribers.setdefault(event_type, []).append(handler)
        self._logger.debug(f"Subscribed handler to {event_type.__name__} events")


class SimulatedPaymentGateway(ports.IPaymentGateway):
    """Заглушка платежного шлюза.

    Реальной оплаты не выполняет, только сообщает сумму через notify.
    Точка расширения для будущей интеграции с платежной системой.
    """

    def __init__(
        self,
        notify: Optional[Callable[[str], None]] = None,
        logger: Optional[ports.ILogger] = None,
    ):
        self._notify = notify
        self._logger = logger or ConsoleLogger()

    def simulate_payment(self, amount: Money) -> None:
        message = f"Обработка платежа на сумму {amount}"
        self._logger.info("Payment simulated", amount=str(amount))
        if self._notify is not None:
            self._notify(message)
