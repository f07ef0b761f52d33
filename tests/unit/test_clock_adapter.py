from datetime import UTC, datetime

from contact_desk.adapters.clock import SystemClock


def test_system_clock():
    clock = SystemClock()
    now = clock.now()
    assert isinstance(now, datetime)
    # Sanity check: is it close to real now?
    real_now = datetime.now()
    diff = abs((real_now - now).total_seconds())
    assert diff < 1.0


def test_now_utc_is_aware():
    now = SystemClock().now_utc()

    assert now.tzinfo is not None
    assert abs((datetime.now(UTC) - now).total_seconds()) < 1.0


def test_today_matches_local_date():
    assert SystemClock().today() == datetime.now().date()
