from datetime import date, datetime, time, timedelta, timezone

from app.core.utils import combine_appointment, day_bounds, like_pattern
from app.db.models.booking import BOOKING_TRANSITIONS, BookingStatus, sources_for

PLUS_SEVEN = timezone(timedelta(hours=7))


def test_every_declared_state_has_transitions_defined():
    assert set(BOOKING_TRANSITIONS) == set(BookingStatus)


def test_terminal_states():
    assert BOOKING_TRANSITIONS[BookingStatus.FINISHED] == frozenset()
    assert BOOKING_TRANSITIONS[BookingStatus.CANCELLED] == frozenset()


def test_sources():
    assert set(sources_for(BookingStatus.FINISHED)) == {BookingStatus.WAITING, BookingStatus.IN_PROGRESS}
    assert sources_for(BookingStatus.IN_PROGRESS) == [BookingStatus.WAITING]
    assert sources_for(BookingStatus.WAITING) == []


def test_combine_appointment_drops_seconds():
    combined = combine_appointment(date(2026, 1, 2), time(9, 15, 30), timezone.utc)
    assert combined == datetime(2026, 1, 2, 9, 15, tzinfo=timezone.utc)


def test_combine_appointment_reads_naive_time_on_clinic_clock():
    combined = combine_appointment(date(2026, 1, 2), time(9, 0), PLUS_SEVEN)
    assert combined == datetime(2026, 1, 2, 2, 0, tzinfo=timezone.utc)
    assert combined.tzinfo == timezone.utc


def test_combine_appointment_keeps_offset_of_aware_time():
    # Clinic clock is UTC, but the caller said +07:00
    combined = combine_appointment(date(2026, 1, 2), time(0, 30, tzinfo=PLUS_SEVEN), timezone.utc)
    assert combined == datetime(2026, 1, 1, 17, 30, tzinfo=timezone.utc)


def test_day_bounds():
    start, end = day_bounds(date(2026, 2, 28), timezone.utc)
    assert start == datetime(2026, 2, 28, tzinfo=timezone.utc)
    assert end == datetime(2026, 3, 1, tzinfo=timezone.utc)


def test_day_bounds_follow_clinic_zone():
    start, end = day_bounds(date(2026, 10, 19), PLUS_SEVEN)
    assert start == datetime(2026, 10, 18, 17, 0, tzinfo=timezone.utc)
    assert end == datetime(2026, 10, 19, 17, 0, tzinfo=timezone.utc)
    # 00:30 local on the 19th falls inside, although it is the 18th in UTC
    appointment = combine_appointment(date(2026, 10, 19), time(0, 30, tzinfo=PLUS_SEVEN), timezone.utc)
    assert start <= appointment < end


def test_like_pattern_escapes_wildcards():
    assert like_pattern("Siti") == "%Siti%"
    assert like_pattern("100%") == "%100\\%%"
    assert like_pattern("a_b") == "%a\\_b%"
