from __future__ import annotations

import pytest

from bazi_oracle.models import Gender, LuckDirection
from bazi_oracle.packages.chart_engine.direction import direction_label, resolve_luck_direction

YANG = ["甲", "丙", "戊", "庚", "壬"]
YIN = ["乙", "丁", "己", "辛", "癸"]


@pytest.mark.parametrize("stem", YANG)
def test_yang_year_male_forward_female_backward(stem):
    pillar = f"{stem}子"
    assert resolve_luck_direction(pillar, Gender.MALE) is LuckDirection.FORWARD
    assert resolve_luck_direction(pillar, Gender.FEMALE) is LuckDirection.BACKWARD


@pytest.mark.parametrize("stem", YIN)
def test_yin_year_male_backward_female_forward(stem):
    pillar = f"{stem}丑"
    assert resolve_luck_direction(pillar, Gender.MALE) is LuckDirection.BACKWARD
    assert resolve_luck_direction(pillar, Gender.FEMALE) is LuckDirection.FORWARD


@pytest.mark.parametrize("gender", [Gender.MALE, Gender.FEMALE])
@pytest.mark.parametrize("pillar", ["", "   ", None])
def test_unset_year_pillar_is_unknown(pillar, gender):
    direction = resolve_luck_direction(pillar, gender)
    assert direction is LuckDirection.UNKNOWN
    assert direction_label(direction) == "等待排盘..."


def test_unrecognized_stem_counts_as_yang():
    assert resolve_luck_direction("X午", Gender.MALE) is LuckDirection.FORWARD
    assert resolve_luck_direction("X午", Gender.FEMALE) is LuckDirection.BACKWARD


def test_leading_whitespace_is_ignored_and_gender_text_accepted():
    assert resolve_luck_direction("  癸亥", "female") is LuckDirection.FORWARD
    assert resolve_luck_direction("庚午", "男") is LuckDirection.FORWARD


def test_labels():
    assert direction_label(LuckDirection.FORWARD) == "顺行 (阳男/阴女)"
    assert direction_label(LuckDirection.BACKWARD) == "逆行 (阴男/阳女)"
