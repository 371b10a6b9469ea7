from __future__ import annotations

from dataclasses import dataclass

from bazi_oracle.models import BirthMoment, DecadeLuckEntry, FourPillars, Gender


class CalendarConversionError(RuntimeError):
    pass


# The bridge's decade enumeration depends on this exact mapping.
GENDER_CODES: dict[Gender, int] = {Gender.MALE: 1, Gender.FEMALE: 0}


def gender_code(gender: Gender) -> int:
    return GENDER_CODES[Gender.parse(gender)]


@dataclass(frozen=True)
class CalendarBridge:
    name: str

    def to_four_pillars(self, moment: BirthMoment) -> FourPillars:
        raise NotImplementedError

    def to_decade_luck_sequence(self, pillars: FourPillars, gender_code: int) -> list[DecadeLuckEntry]:
        raise NotImplementedError
