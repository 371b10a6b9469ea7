from __future__ import annotations

from dataclasses import dataclass

from bazi_oracle.config import ChartSettings
from bazi_oracle.models import BirthMoment, DecadeLuckEntry, FourPillars

from .base import CalendarConversionError
from .provider_lunar import LunarPythonBridge

_BOUNDS: tuple[tuple[str, int, int], ...] = (
    ("year", 1900, 2100),
    ("month", 1, 12),
    ("day", 1, 31),
    ("hour", 0, 23),
    ("minute", 0, 59),
    ("second", 0, 59),
)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _days_in_month(year: int, month: int) -> int:
    if month == 2 and (year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def check_moment(moment: BirthMoment) -> None:
    for name, low, high in _BOUNDS:
        value = getattr(moment, name)
        if not low <= value <= high:
            raise CalendarConversionError(f"{name} out of range [{low}, {high}]: {value}")
    last_day = _days_in_month(moment.year, moment.month)
    if moment.day > last_day:
        raise CalendarConversionError(f"{moment.year}-{moment.month:02d} has only {last_day} days: {moment.day}")


@dataclass(frozen=True)
class CalendarService:
    zi_hour_sect: int = 2
    yun_sect: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "_primary", LunarPythonBridge(zi_hour_sect=self.zi_hour_sect, yun_sect=self.yun_sect))

    @classmethod
    def from_settings(cls, settings: ChartSettings) -> "CalendarService":
        return cls(zi_hour_sect=settings.zi_hour_sect, yun_sect=settings.yun_sect)

    def to_four_pillars(self, moment: BirthMoment) -> FourPillars:
        check_moment(moment)
        return self._primary.to_four_pillars(moment)

    def to_decade_luck_sequence(self, pillars: FourPillars, gender_code: int) -> list[DecadeLuckEntry]:
        return self._primary.to_decade_luck_sequence(pillars, gender_code)
