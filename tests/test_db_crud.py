import pytest
from datetime import datetime, timedelta, timezone

from booking_api.core.database import build_engine, init_db
from booking_api.core.errors import BookingNotFound
from booking_api.models.db_models import from_storage, utcnow
from booking_api.services.store import BookingStore


@pytest.fixture
def store():
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    yield BookingStore(engine)
    engine.dispose()


def test_db_crud_cycle(store):
    start = datetime.now(timezone.utc) + timedelta(days=365)

    booking_id = store.create(name="TEST QA_USER", service="test_crud", start_at=start, phone="+15305551234")
    assert booking_id is not None

    booking = store.get(booking_id)
    assert booking.name == "TEST QA_USER"
    assert booking.notes == ""
    assert booking.email is None
    assert from_storage(booking.start_at) == start
    assert from_storage(booking.created_at) <= utcnow()

    updated = store.update_by_id(booking_id, name="TEST QA_USER", service="test_crud_v2",
                                 start_at=start, phone=None, notes="moved")
    assert updated.id == booking_id
    assert updated.service == "test_crud_v2"
    assert updated.phone is None
    assert updated.notes == "moved"
    assert updated.created_at == booking.created_at


def test_update_missing_booking_does_not_insert(store):
    with pytest.raises(BookingNotFound):
        store.update_by_id(42, name="Nobody", service="x", start_at=utcnow())
    assert store.list_all() == []


def test_list_all_sorted_regardless_of_insertion(store):
    now = utcnow()
    ids = [store.create(name=f"Client {offset}", service="cut", start_at=now + timedelta(hours=offset))
           for offset in (5, -3, 1)]

    assert [b.id for b in store.list_all()] == [ids[1], ids[2], ids[0]]


def test_find_by_phone_suffix(store):
    now = utcnow()
    past = store.create(name="A B", service="cut", start_at=now - timedelta(minutes=1), phone="+15305551234")
    exact = store.create(name="A B", service="cut", start_at=now, phone="+15305551234")
    later = store.create(name="A B", service="cut", start_at=now + timedelta(days=1), phone="+15305551234")
    store.create(name="A B", service="cut", start_at=now + timedelta(days=1), phone="+15305551235")
    store.create(name="A B", service="cut", start_at=now + timedelta(days=1))

    found = [b.id for b in store.find_by_phone_suffix("1234", now)]

    assert past not in found
    assert found == [exact, later]


def test_start_times_normalized_to_utc(store):
    pacific = timezone(timedelta(hours=-7))
    aware = store.create(name="A B", service="cut", start_at=datetime(2030, 5, 1, 10, 30, tzinfo=pacific),
                         phone="+15305551234")
    naive = store.create(name="A B", service="cut", start_at=datetime(2030, 5, 1, 17, 30),
                         phone="+15305551234")

    expected = datetime(2030, 5, 1, 17, 30, tzinfo=timezone.utc)
    assert from_storage(store.get(aware).start_at) == expected
    assert from_storage(store.get(naive).start_at) == expected

    # An offset "now" compares against the stored UTC instant
    same_instant = datetime(2030, 5, 1, 10, 30, tzinfo=pacific)
    assert [b.id for b in store.find_by_phone_suffix("1234", same_instant)] == [aware, naive]
    assert store.find_by_phone_suffix("1234", same_instant + timedelta(minutes=1)) == []
