"""Tests for environment settings validation."""

import pytest
from pydantic import ValidationError

from app.config.settings import Settings


def test_unknown_checkin_timezone_fails_at_startup():
    with pytest.raises(ValidationError):
        Settings(checkin_timezone="Mars/Olympus_Mons")


@pytest.mark.parametrize("zone", ["UTC", "utc", "Europe/Stockholm", "Pacific/Pago_Pago"])
def test_known_checkin_timezones_are_accepted(zone):
    assert Settings(checkin_timezone=zone).checkin_timezone == zone
