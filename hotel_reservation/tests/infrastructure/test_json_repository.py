"""
Тесты инфраструктуры: JSON-хранилище, логгер, шина событий, имитация оплаты.
"""

import io
import json
import os
import stat
from decimal import Decimal

import pytest

from hotel_reservation.booking.domain import BookingCancelled, BookingCreated
from hotel_reservation.booking.infrastructure import (
    ConsoleLogger,
    InMemoryBookingRepository,
    InMemoryEventBus,
    JsonFileBookingRepository,
    SimulatedPaymentGateway,
)
from hotel_reservation.shared_kernel import Money, PersistenceWriteFailure, RoomType

# Корректная запись; тесты портят в ней одно поле
VALID_RECORD = (
    '[{"customer_name": "Ali", "cnic": "1234567890123", "room_number": 101, '
    '"type": "Standard", "date": "15-06-2025", '
    '"price": {"amount": "5000", "currency": "PKR"}}]'
)


class TestJsonFileBookingRepository:
    """Тесты хранилища бронирований в JSON-файле."""

    def test_missing_file_gives_empty_ledger(self, tmp_path, logger):
        repo = JsonFileBookingRepository(tmp_path / "bookings.json", logger=logger)

        assert repo.load() == []
        assert logger.messages("warning") == []

    def test_empty_file_gives_empty_ledger(self, tmp_path, logger):
        path = tmp_path / "bookings.json"
        path.write_text("   ", encoding="utf-8")

        assert JsonFileBookingRepository(path, logger=logger).load() == []

    def test_round_trip(self, tmp_path, logger, booking_factory):
        bookings = [
            booking_factory(name="Ali Khan", room_number=101),
            booking_factory(
                name="Сара",
                cnic="2222222222222",
                room_number=301,
                room_type=RoomType.SUITE,
                date="20-07-2025",
                price="12000.50",
            ),
        ]
        path = tmp_path / "bookings.json"

        JsonFileBookingRepository(path, logger=logger).save(bookings)
        loaded = JsonFileBookingRepository(path, logger=logger).load()

        assert loaded == bookings
        assert loaded[1].price.amount == Decimal("12000.50")

    def test_save_load_save_is_stable(self, tmp_path, logger, booking_factory):
        path = tmp_path / "bookings.json"
        repo = JsonFileBookingRepository(path, logger=logger)
        repo.save([booking_factory()])
        first = path.read_bytes()

        repo.save(repo.load())

        assert path.read_bytes() == first

    def test_file_is_a_json_list_of_records(self, tmp_path, logger, booking_factory):
        path = tmp_path / "bookings.json"
        JsonFileBookingRepository(path, logger=logger).save([booking_factory()])

        data = json.loads(path.read_text(encoding="utf-8"))

        assert data == [
            {
                "customer_name": "Ali Khan",
                "cnic": "1234567890123",
                "room_number": 101,
                "type": "Standard",
                "date": "15-06-2025",
                "price": {"amount": "5000", "currency": "PKR"},
            }
        ]

    def test_save_overwrites_previous_content(self, tmp_path, logger, booking_factory):
        path = tmp_path / "bookings.json"
        repo = JsonFileBookingRepository(path, logger=logger)
        repo.save([booking_factory(), booking_factory(room_number=102)])

        repo.save([])

        assert repo.load() == []

    def test_save_creates_parent_directory(self, tmp_path, logger, booking_factory):
        path = tmp_path / "data" / "bookings.json"
        JsonFileBookingRepository(path, logger=logger).save([booking_factory()])
        assert path.exists()

    @pytest.mark.parametrize(
        "content",
        [
            "not json at all",
            '{"customer_name": "Ali"}',
            '[{"customer_name": "Ali"}]',
            VALID_RECORD.replace('"cnic": "1234567890123"', '"cnic": "x"'),
            VALID_RECORD.replace('"date": "15-06-2025"', '"date": "tomorrow"'),
            VALID_RECORD.replace('"customer_name": "Ali"', '"customer_name": "  "'),
        ],
    )
    def test_corrupt_file_gives_empty_ledger_and_warning(
        self, tmp_path, logger, content
    ):
        path = tmp_path / "bookings.json"
        path.write_text(content, encoding="utf-8")

        assert JsonFileBookingRepository(path, logger=logger).load() == []
        assert len(logger.messages("warning")) == 1

    def test_unreadable_path_gives_empty_ledger(self, tmp_path, logger):
        path = tmp_path / "bookings.json"
        path.mkdir()

        assert JsonFileBookingRepository(path, logger=logger).load() == []
        assert len(logger.messages("warning")) == 1

    def test_write_failure_raises_and_leaves_no_temp_file(
        self, tmp_path, logger, booking_factory
    ):
        path = tmp_path / "bookings.json"
        path.mkdir()
        repo = JsonFileBookingRepository(path, logger=logger)

        with pytest.raises(PersistenceWriteFailure) as exc_info:
            repo.save([booking_factory()])

        assert isinstance(exc_info.value.__cause__, OSError)
        assert [p for p in tmp_path.iterdir() if p.name.endswith(".tmp")] == []

    def test_write_failure_keeps_old_file(self, tmp_path, logger, booking_factory):
        blocker = tmp_path / "blocker"
        blocker.write_text("data", encoding="utf-8")
        repo = JsonFileBookingRepository(blocker / "bookings.json", logger=logger)

        with pytest.raises(PersistenceWriteFailure):
            repo.save([booking_factory()])

        assert blocker.read_text(encoding="utf-8") == "data"

    def test_valid_record_is_loaded(self, tmp_path, logger):
        path = tmp_path / "bookings.json"
        path.write_text(VALID_RECORD, encoding="utf-8")

        loaded = JsonFileBookingRepository(path, logger=logger).load()

        assert [b.customer_name for b in loaded] == ["Ali"]
        assert logger.messages("warning") == []

    def test_save_keeps_existing_file_mode(self, tmp_path, logger, booking_factory):
        path = tmp_path / "bookings.json"
        path.write_text("[]", encoding="utf-8")
        os.chmod(path, 0o640)

        JsonFileBookingRepository(path, logger=logger).save([booking_factory()])

        assert stat.S_IMODE(path.stat().st_mode) == 0o640

    def test_new_file_gets_umask_mode(self, tmp_path, logger, booking_factory):
        path = tmp_path / "bookings.json"
        umask = os.umask(0o022)
        try:
            JsonFileBookingRepository(path, logger=logger).save([booking_factory()])
        finally:
            os.umask(umask)

        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_save_syncs_before_rename(
        self, tmp_path, logger, booking_factory, monkeypatch
    ):
        path = tmp_path / "bookings.json"
        calls = []
        real_fsync = os.fsync
        real_replace = os.replace

        def fsync(fd):
            calls.append("fsync")
            real_fsync(fd)

        def replace(src, dst):
            calls.append("replace")
            real_replace(src, dst)

        monkeypatch.setattr(os, "fsync", fsync)
        monkeypatch.setattr(os, "replace", replace)

        JsonFileBookingRepository(path, logger=logger).save([booking_factory()])

        assert calls == ["fsync", "replace"]


class TestInMemoryBookingRepository:
    def test_stores_copies(self, booking_factory):
        booking = booking_factory()
        repo = InMemoryBookingRepository()

        repo.save([booking])
        booking.customer_name = "Changed"

        assert repo.load()[0].customer_name == "Ali Khan"
        assert repo.save_count == 1


class TestConsoleLogger:
    def test_writes_level_message_and_context(self):
        stream = io.StringIO()
        ConsoleLogger(stream=stream).info("Room booked", room_number=101)

        output = stream.getvalue()
        assert "[INFO] Room booked" in output
        assert '"room_number": 101' in output

    def test_debug_is_hidden_by_default(self):
        stream = io.StringIO()
        ConsoleLogger(stream=stream).debug("hidden")
        assert stream.getvalue() == ""

    def test_debug_is_written_when_enabled(self):
        stream = io.StringIO()
        ConsoleLogger(debug=True, stream=stream).debug("shown")
        assert "[DEBUG] shown" in stream.getvalue()


class TestInMemoryEventBus:
    """Тесты шины событий."""

    @pytest.fixture
    def event(self) -> BookingCreated:
        return BookingCreated(
            customer_name="Ali", room_number=101, price=Money(amount=Decimal("5000"))
        )

    def test_publish_calls_subscribers(self, logger, event):
        bus = InMemoryEventBus(logger=logger)
        received = []
        bus.subscribe(BookingCreated, received.append)

        bus.publish(event)

        assert received == [event]

    def test_publish_only_to_matching_type(self, logger, event):
        bus = InMemoryEventBus(logger=logger)
        received = []
        bus.subscribe(BookingCancelled, received.append)

        bus.publish(event)

        assert received == []

    def test_handler_error_is_logged_not_raised(self, logger, event):
        bus = InMemoryEventBus(logger=logger)
        received = []

        def broken(_event):
            raise RuntimeError("boom")

        bus.subscribe(BookingCreated, broken)
        bus.subscribe(BookingCreated, received.append)

        bus.publish(event)

        assert received == [event]
        assert logger.messages("error") == ["Error in event handler for BookingCreated"]


class TestSimulatedPaymentGateway:
    def test_reports_amount(self, logger):
        messages = []
        gateway = SimulatedPaymentGateway(notify=messages.append, logger=logger)

        gateway.simulate_payment(Money(amount=Decimal("8000")))

        assert messages == ["Обработка платежа на сумму PKR 8000"]
        assert logger.messages("info") == ["Payment simulated"]

    def test_without_notifier_only_logs(self, logger):
        gateway = SimulatedPaymentGateway(logger=logger)
        gateway.simulate_payment(Money(amount=Decimal("8000")))
        assert logger.messages("info") == ["Payment simulated"]
