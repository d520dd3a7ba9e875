"""Tests for the PRICING settings layer.

Run with: pytest tests/test_conf.py -v
"""

import pytest
from decimal import Decimal
from django.test import override_settings

from pricing.conf import pricing_settings
from pricing.domain.errors import ErrorCode
from pricing.domain.value_objects import ScheduleType
from pricing.services.payment_schedule import create_plan, new_cash_bond


class TestPricingSettings:
    def test_defaults(self):
        assert pricing_settings.CASH_BOND_AMOUNT == Decimal("3000")
        assert pricing_settings.DEFAULT_GUEST_COUNT == 100
        assert pricing_settings.REFERENCE_REQUIRED_METHODS == ["gcash", "bank-transfer"]

    def test_unknown_setting(self):
        with pytest.raises(AttributeError):
            pricing_settings.NOT_A_SETTING

    def test_override_reloads(self):
        with override_settings(PRICING={"CASH_BOND_AMOUNT": "5000"}):
            assert new_cash_bond().amount == Decimal("5000")
        assert new_cash_bond().amount == Decimal("3000")

    def test_default_schedule_type(self):
        with override_settings(PRICING={"DEFAULT_SCHEDULE_TYPE": "quarterly"}):
            assert create_plan(Decimal("100000")).schedule_type is ScheduleType.QUARTERLY

    def test_bond_not_required_by_default(self):
        with override_settings(PRICING={"CASH_BOND_REQUIRED": False}):
            assert new_cash_bond().required is False

    def test_default_guest_count(self, store, service, package_record):
        del package_record["guest_capacity"]
        store.load_package(package_record)

        with override_settings(PRICING={"DEFAULT_GUEST_COUNT": 60}):
            result = service.start_session("pkg-1")

        assert result.session.state.guest_count == 60

    def test_cash_reference_requirement_is_configurable(self, session):
        methods = ["gcash", "bank-transfer", "cash"]
        with override_settings(PRICING={"REFERENCE_REQUIRED_METHODS": methods}):
            result = session.record_payment("cash")

        assert [e.code for e in result.errors] == [ErrorCode.REFERENCE_NUMBER_REQUIRED]
