from datetime import date, datetime, time

import pytest
import pytz

from barberbook.errors import SlotFormatError
from barberbook.formatting import (
    format_slot,
    format_slots,
    localize_slot,
    snap_minutes,
    to_shop_time,
)

NEW_YORK = pytz.timezone("America/New_York")


def test_format_24h():
    assert format_slot(time(9, 0)) == "09:00"
    assert format_slot(time(17, 45)) == "17:45"
    assert format_slot(0) == "00:00"


def test_format_12h():
    assert format_slot(time(9, 0), style="12h") == "9:00 AM"
    assert format_slot(time(0, 15), style="12h") == "12:15 AM"
    assert format_slot(time(12, 30), style="12h") == "12:30 PM"
    assert format_slot(time(23, 0), style="12h") == "11:00 PM"


def test_unknown_style_is_rejected():
    with pytest.raises(SlotFormatError):
        format_slot(time(9, 0), style="french")


@pytest.mark.parametrize("minutes", [-1, 1440, 2000])
def test_times_outside_the_day_fail(minutes):
    with pytest.raises(SlotFormatError):
        format_slot(minutes)


def test_snap_modes():
    assert snap_minutes(time(9, 10), 30) == 540
    assert snap_minutes(time(9, 15), 30) == 570  # ties round up
    assert snap_minutes(time(9, 10), 30, mode="ceil") == 570
    assert snap_minutes(time(9, 50), 30, mode="floor") == 570
    assert snap_minutes(time(9, 30), 30, mode="ceil") == 570


def test_snapping_late_slots_stays_inside_the_day():
    assert snap_minutes(time(23, 50), 30, mode="ceil") == 1410
    assert snap_minutes(time(23, 50), 30) == 1410
    assert snap_minutes(time(23, 59), 45) == 1395
    assert format_slots([time(23, 30), time(23, 50)], snap_to=30) == ["23:30"]
    assert format_slots([time(23, 50)], style="12h", snap_to=30) == ["11:30 PM"]


def test_format_slots_snaps_and_drops_duplicates():
    starts = [time(9, 0), time(9, 10), time(9, 40), time(10, 45)]

    assert format_slots(starts) == ["09:00", "09:10", "09:40", "10:45"]
    assert format_slots(starts, snap_to=30, mode="floor") == ["09:00", "09:30", "10:30"]
    assert format_slots(starts, style="12h", snap_to=30) == ["9:00 AM", "9:30 AM", "11:00 AM"]


def test_localize_and_convert_back():
    moment = localize_slot(date(2031, 7, 1), time(9, 30), NEW_YORK)

    assert moment.utcoffset().total_seconds() == -4 * 3600  # daylight time
    assert moment.astimezone(pytz.UTC).hour == 13
    assert to_shop_time(moment.astimezone(pytz.UTC), NEW_YORK) == time(9, 30)


def test_naive_datetimes_are_rejected():
    with pytest.raises(SlotFormatError):
        to_shop_time(datetime(2031, 1, 6, 9, 0), NEW_YORK)
