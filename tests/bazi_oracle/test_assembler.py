from __future__ import annotations

import pytest

from bazi_oracle.models import BirthMoment, DecadeLuckEntry, FourPillars, Gender, PillarToken
from bazi_oracle.packages.calendar_engine.base import CalendarConversionError
from bazi_oracle.packages.chart_engine.assembler import DecadeAnomalyWarning, assemble


class _FakeBridge:
    def __init__(self, decades: list[DecadeLuckEntry] | None = None, fail: bool = False) -> None:
        self.decades = decades if decades is not None else [
            DecadeLuckEntry(start_age=1, gan_zhi=""),
            DecadeLuckEntry(start_age=8, gan_zhi="壬午"),
            DecadeLuckEntry(start_age=18, gan_zhi="癸未"),
        ]
        self.fail = fail
        self.gender_codes: list[int] = []

    def to_four_pillars(self, moment: BirthMoment) -> FourPillars:
        if self.fail:
            raise CalendarConversionError("wrong solar day")
        return FourPillars(
            source="fake",
            moment=moment,
            year=PillarToken("庚", "午"),
            month=PillarToken("辛", "巳"),
            day=PillarToken("丙", "子"),
            hour=PillarToken("甲", "午"),
        )

    def to_decade_luck_sequence(self, pillars: FourPillars, gender_code: int) -> list[DecadeLuckEntry]:
        self.gender_codes.append(gender_code)
        return list(self.decades)


MOMENT = BirthMoment(1990, 5, 15, 14)


def test_selects_first_formal_decade_not_child_limit():
    result = assemble(bridge=_FakeBridge(), moment=MOMENT, gender=Gender.MALE)
    assert result.pillars.texts == ("庚午", "辛巳", "丙子", "甲午")
    assert result.decade.start_age == 8
    assert result.decade.gan_zhi == "壬午"
    assert result.warnings == ()


def test_gender_code_mapping():
    bridge = _FakeBridge()
    assemble(bridge=bridge, moment=MOMENT, gender=Gender.MALE)
    assemble(bridge=bridge, moment=MOMENT, gender=Gender.FEMALE)
    assert bridge.gender_codes == [1, 0]


@pytest.mark.parametrize("decades", [[], [DecadeLuckEntry(start_age=3, gan_zhi="")]])
def test_short_sequence_falls_back_with_anomaly(decades):
    result = assemble(bridge=_FakeBridge(decades=decades), moment=MOMENT, gender=Gender.FEMALE)
    assert result.pillars.year.text == "庚午"
    assert result.decade.start_age == 1
    assert result.decade.gan_zhi == ""
    assert result.anomalous
    assert isinstance(result.warnings[0], DecadeAnomalyWarning)


def test_conversion_error_propagates():
    with pytest.raises(CalendarConversionError):
        assemble(bridge=_FakeBridge(fail=True), moment=MOMENT, gender=Gender.MALE)


def test_repeated_assembly_is_identical():
    bridge = _FakeBridge()
    first = assemble(bridge=bridge, moment=MOMENT, gender=Gender.MALE)
    second = assemble(bridge=bridge, moment=MOMENT, gender=Gender.MALE)
    assert first == second


class _BrokenDecadeBridge(_FakeBridge):
    def to_decade_luck_sequence(self, pillars: FourPillars, gender_code: int) -> list[DecadeLuckEntry]:
        raise IndexError("decade table exhausted")


def test_unexpected_bridge_error_becomes_conversion_error():
    with pytest.raises(CalendarConversionError, match="decade table exhausted") as info:
        assemble(bridge=_BrokenDecadeBridge(), moment=MOMENT, gender=Gender.MALE)
    assert isinstance(info.value.__cause__, IndexError)
