import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

from fastapi import BackgroundTasks

from booking_api.core.database import build_engine, init_db
from booking_api.core.errors import ValidationFailed
from booking_api.models.api_models import BookingRequest
from booking_api.services.booking_service import BookingService, last_name_of, to_e164
from booking_api.services.notification_service import NotificationResult, NotificationStatus
from booking_api.services.store import BookingStore


@pytest.mark.parametrize("raw, expected", [
    ("5305551234", "+15305551234"),
    ("(530) 555-1234", "+15305551234"),
    ("15305551234", "+15305551234"),
    ("1-530-555-1234", "+15305551234"),
    ("+445305551234", "+445305551234"),
    ("+44 20 7946 0958", "+44 20 7946 0958"),
    ("25305551234", None),
    ("555-1234", None),
    ("abc", None),
    ("", None),
    (None, None),
])
def test_to_e164(raw, expected):
    assert to_e164(raw) == expected


@pytest.mark.parametrize("name, expected", [
    ("Juan Reyes", "reyes"),
    ("  juan   de la  REYES ", "reyes"),
    ("Cher", "cher"),
    ("", ""),
    (None, ""),
])
def test_last_name_of(name, expected):
    assert last_name_of(name) == expected


@pytest.fixture
def notifier():
    mock_notifier = MagicMock()
    mock_notifier.send_booking_confirmation = AsyncMock(
        return_value=NotificationResult(NotificationStatus.SENT, sid="SM1")
    )
    return mock_notifier


@pytest.fixture
def service(settings, notifier):
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    yield BookingService(BookingStore(engine), notifier, settings)
    engine.dispose()


def request_for(**overrides) -> BookingRequest:
    fields = {
        "name": "Juan Reyes",
        "phone": "530 555 1234",
        "service": "Regular Cut ($25)",
        "startAt": datetime.now(timezone.utc) + timedelta(days=2),
    }
    fields.update(overrides)
    return BookingRequest(**fields)


@pytest.mark.asyncio
async def test_create_notifies_inline(service, notifier):
    req = request_for()

    outcome = await service.create_booking(req)

    assert outcome.notification.status == NotificationStatus.SENT
    notifier.send_booking_confirmation.assert_awaited_once_with(
        "+15305551234", "Juan Reyes", "Regular Cut ($25)", req.start_at
    )


@pytest.mark.asyncio
async def test_create_reports_failed_notification(service, notifier):
    notifier.send_booking_confirmation.return_value = NotificationResult(NotificationStatus.FAILED, error="boom")

    outcome = await service.create_booking(request_for())

    assert outcome.notification.status == NotificationStatus.FAILED
    assert service.store.get(outcome.id) is not None


@pytest.mark.asyncio
async def test_create_without_phone_skips_notification(service, notifier):
    outcome = await service.create_booking(request_for(phone="call me maybe"))

    assert outcome.notification.status == NotificationStatus.SKIPPED
    notifier.send_booking_confirmation.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_queues_notification_in_background(settings, notifier):
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    background = BookingService(BookingStore(engine), notifier, settings.model_copy(update={"SMS_IN_BACKGROUND": True}))
    tasks = BackgroundTasks()

    outcome = await background.create_booking(request_for(), tasks)

    assert outcome.notification.status == NotificationStatus.QUEUED
    assert len(tasks.tasks) == 1
    notifier.send_booking_confirmation.assert_not_awaited()
    engine.dispose()


@pytest.mark.asyncio
async def test_create_duplicates_are_not_merged(service):
    first = await service.create_booking(request_for())
    second = await service.create_booking(request_for())

    assert first.id != second.id
    assert len(service.list_bookings()) == 2


@pytest.mark.asyncio
async def test_lookup_uses_given_instant(service):
    start = datetime(2030, 3, 1, 17, 0, tzinfo=timezone.utc)
    await service.create_booking(request_for(startAt=start))

    assert len(service.lookup("reyes", "1234", now=datetime(2030, 3, 1, 17, 0))) == 1
    assert service.lookup("reyes", "1234", now=datetime(2030, 3, 1, 17, 1)) == []


def test_lookup_validation(service):
    with pytest.raises(ValidationFailed) as excinfo:
        service.lookup("Reyes", "12a4")
    assert excinfo.value.error == "invalid_last4"

    with pytest.raises(ValidationFailed) as excinfo:
        service.lookup("   ", "1234")
    assert excinfo.value.error == "missing_lookup_fields"


def test_update_requires_start_time(service):
    with pytest.raises(ValidationFailed) as excinfo:
        service.update_booking(1, request_for(startAt=None))
    assert excinfo.value.error == "missing_start_at"
