"""
Tests de utilidades compartidas: permisos, fechas de negocio y validadores
"""
from datetime import date, datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi import HTTPException

from app.common.dates import business_day_bounds, business_today, month_start, period_start, to_business_date
from app.common.permissions import Action, Actor, check, ensure_allowed
from app.common.validators import format_whatsapp_number, initials, validate_phone


def _actor(role="Technician"):
    return Actor(user_id=uuid4(), role=role, name="Test User")


class TestPermissions:

    def test_unlisted_actions_are_open(self):
        assert check("jobs", Action.DELETE, _actor()).allowed

    def test_only_admin_hard_deletes_customers(self):
        assert check("customers", Action.HARD_DELETE, _actor("Admin")).allowed
        decision = check("customers", Action.HARD_DELETE, _actor("Supervisor"))
        assert not decision.allowed
        assert decision.reason == "Only Admin can permanently delete customers"

    def test_catalog_owner_rules(self):
        owner = _actor()
        local = SimpleNamespace(visibility="local", account=owner.user_id)
        default = SimpleNamespace(visibility="default", account=None)

        assert check("catalog", Action.UPDATE, owner, local).allowed
        assert not check("catalog", Action.UPDATE, _actor(), local).allowed
        assert check("catalog", Action.UPDATE, _actor("Admin"), local).allowed
        assert not check("catalog", Action.DELETE, owner, default).allowed

    def test_ensure_allowed_raises_403(self):
        with pytest.raises(HTTPException) as exc:
            ensure_allowed("customers", Action.HARD_DELETE, _actor())
        assert exc.value.status_code == 403


class TestBusinessDates:

    def test_late_utc_evening_is_next_business_day(self):
        assert to_business_date(datetime(2024, 5, 31, 20, 0, tzinfo=timezone.utc)) == date(2024, 6, 1)
        assert to_business_date(datetime(2024, 5, 31, 18, 0)) == date(2024, 5, 31)

    def test_day_bounds_in_utc(self):
        start, end = business_day_bounds(date(2024, 6, 1))
        assert start == datetime(2024, 5, 31, 19, 0, tzinfo=timezone.utc)
        assert (end - start).total_seconds() == 86400

    def test_today_uses_business_offset(self):
        assert business_today(datetime(2024, 1, 1, 21, 30, tzinfo=timezone.utc)) == date(2024, 1, 2)

    def test_period_start(self):
        now = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
        assert period_start("month", now) == datetime(2024, 5, 31, 19, 0, tzinfo=timezone.utc)
        assert period_start("year", now) == datetime(2023, 12, 31, 19, 0, tzinfo=timezone.utc)
        assert period_start("week", now) == datetime(2024, 6, 7, 19, 0, tzinfo=timezone.utc)

    def test_month_start_crosses_year(self):
        assert month_start(date(2024, 2, 20), 3) == date(2023, 11, 1)


class TestValidators:

    @pytest.mark.parametrize("raw", ["03001234567", "923001234567", "3001234567", "+923001234567", "0300-123 4567"])
    def test_whatsapp_number(self, raw):
        assert format_whatsapp_number(raw, "+92") == "+923001234567"

    def test_phone_validation(self):
        assert validate_phone("(0300) 123-4567")
        assert not validate_phone("12ab")

    def test_initials(self):
        assert initials("Bilal Hassan Khan") == "BH"
        assert initials("") == ""
