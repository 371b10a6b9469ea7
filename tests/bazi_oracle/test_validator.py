from __future__ import annotations

import pytest

from bazi_oracle.packages.chart_engine.validator import MissingFieldError, validate


def test_all_present_passes():
    assert validate("1990", "5", "15", "14") is None


def test_hour_zero_is_present():
    validate("1990", "5", "15", "0")
    validate(1990, 5, 15, 0)


def test_all_missing_reports_every_field():
    with pytest.raises(MissingFieldError) as err:
        validate("", "", "", "")
    assert err.value.missing == ("birthYear", "birthMonth", "birthDay", "birthHour")


def test_blank_and_none_are_missing():
    with pytest.raises(MissingFieldError) as err:
        validate("1990", "  ", None, "3")
    assert err.value.missing == ("birthMonth", "birthDay")


def test_out_of_range_values_are_not_checked_here():
    validate("3000", "13", "40", "99")
