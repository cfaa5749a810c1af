from datetime import date

import pytest

from app.core.errors import ForbiddenError, InvalidTransitionError, NotFoundError, ValidationError
from app.services import accounts, bookings, sitters


def book(db, owner, sitter, start=date(2024, 6, 1), end=date(2024, 6, 3), **kwargs):
    return bookings.create(
        db,
        owner=owner,
        sitter_id=sitter.id,
        cat_name=kwargs.pop("cat_name", "Mochi"),
        cat_breed=kwargs.pop("cat_breed", "Ragdoll"),
        start_date=start,
        end_date=end,
        **kwargs,
    )


def test_three_day_stay_costs_three_days(db, make_owner, make_sitter):
    owner = make_owner()
    sitter = make_sitter("s@example.com", daily_rate=40)

    booking = book(db, owner, sitter, special_instructions="Feed twice a day")

    assert booking.total_days == 3
    assert booking.total_cost == 120
    assert booking.status == "pending"
    assert booking.special_instructions == "Feed twice a day"


def test_same_day_booking_is_one_day(db, make_owner, make_sitter):
    owner = make_owner()
    sitter = make_sitter("s@example.com", daily_rate=55)

    booking = book(db, owner, sitter, start=date(2024, 6, 1), end=date(2024, 6, 1))

    assert booking.total_days == 1
    assert booking.total_cost == 55


def test_end_before_start_is_rejected(db, make_owner, make_sitter):
    owner = make_owner()
    sitter = make_sitter("s@example.com")

    with pytest.raises(ValidationError):
        book(db, owner, sitter, start=date(2024, 6, 3), end=date(2024, 6, 1))


def test_unknown_sitter(db, make_owner):
    owner = make_owner()

    with pytest.raises(NotFoundError):
        bookings.create(db, owner, "no-such-sitter", "Mochi", None, date(2024, 6, 1), date(2024, 6, 2))


def test_snapshots_survive_later_edits(db, make_owner, make_sitter):
    owner = make_owner()
    sitter = make_sitter("s@example.com", daily_rate=40)
    booking = book(db, owner, sitter)

    accounts.update_profile(db, owner, first_name="Changed", phone="000")
    sitters.update_own_profile(db, sitter.user, name="Renamed Sitter", daily_rate=90)
    db.refresh(booking)

    assert booking.owner_name == "Olivia Owner"
    assert booking.owner_email == "owner@example.com"
    assert booking.owner_phone == "555-0100"
    assert booking.sitter_name == "Sam Sitter"
    assert booking.total_cost == 120


def test_overlapping_bookings_are_allowed(db, make_owner, make_sitter):
    owner = make_owner()
    sitter = make_sitter("s@example.com")

    book(db, owner, sitter)
    book(db, owner, sitter, cat_name="Biscuit")

    assert len(bookings.list_all(db)) == 2


def test_list_mine_by_role(db, make_owner, make_sitter):
    alice = make_owner("alice@example.com", first_name="Alice")
    bob = make_owner("bob@example.com", first_name="Bob")
    sitter_a = make_sitter("a@example.com")
    sitter_b = make_sitter("b@example.com")

    first = book(db, alice, sitter_a)
    second = book(db, alice, sitter_b)
    third = book(db, bob, sitter_a)

    assert [b.id for b in bookings.list_mine(db, alice)] == [second.id, first.id]
    assert [b.id for b in bookings.list_mine(db, bob)] == [third.id]
    assert [b.id for b in bookings.list_mine(db, sitter_a.user)] == [third.id, first.id]
    assert [b.id for b in bookings.list_all(db)] == [third.id, second.id, first.id]


def test_confirm_then_complete(db, make_owner, make_sitter):
    owner = make_owner()
    sitter = make_sitter("s@example.com")
    booking = book(db, owner, sitter)

    assert bookings.set_status(db, booking.id, "confirmed", sitter.user).status == "confirmed"
    assert bookings.set_status(db, booking.id, "completed", sitter.user).status == "completed"


@pytest.mark.parametrize(
    "path, illegal",
    [
        ([], "completed"),
        ([], "pending"),
        (["confirmed"], "confirmed"),
        (["confirmed"], "pending"),
        (["confirmed", "completed"], "cancelled"),
        (["cancelled"], "confirmed"),
        (["cancelled"], "pending"),
    ],
)
def test_illegal_transitions(db, make_owner, make_sitter, path, illegal):
    owner = make_owner()
    sitter = make_sitter("s@example.com")
    booking = book(db, owner, sitter)
    for step in path:
        bookings.set_status(db, booking.id, step, sitter.user)

    with pytest.raises(InvalidTransitionError):
        bookings.set_status(db, booking.id, illegal, sitter.user)


@pytest.mark.parametrize("start", ["pending", "confirmed"])
def test_cancel_from_open_states(db, make_owner, make_sitter, start):
    owner = make_owner()
    sitter = make_sitter("s@example.com")
    booking = book(db, owner, sitter)
    if start == "confirmed":
        bookings.set_status(db, booking.id, "confirmed", sitter.user)

    assert bookings.set_status(db, booking.id, "cancelled", sitter.user).status == "cancelled"


def test_only_the_booked_sitter_may_change_status(db, make_owner, make_sitter):
    owner = make_owner()
    sitter = make_sitter("s@example.com")
    other = make_sitter("other@example.com")
    booking = book(db, owner, sitter)

    with pytest.raises(ForbiddenError):
        bookings.set_status(db, booking.id, "confirmed", other.user)
    with pytest.raises(ForbiddenError):
        bookings.set_status(db, booking.id, "confirmed", owner)
    with pytest.raises(NotFoundError):
        bookings.set_status(db, "missing", "confirmed", sitter.user)


def test_unknown_status_is_rejected(db, make_owner, make_sitter):
    owner = make_owner()
    sitter = make_sitter("s@example.com")
    booking = book(db, owner, sitter)

    with pytest.raises(ValidationError):
        bookings.set_status(db, booking.id, "archived", sitter.user)
    db.refresh(booking)
    assert booking.status == "pending"
