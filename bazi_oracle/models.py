from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, raw: "Gender | str") -> "Gender":
        if isinstance(raw, Gender):
            return raw
        key = str(raw or "").strip().lower()
        if key in {"male", "m", "1", "男"}:
            return cls.MALE
        if key in {"female", "f", "0", "女"}:
            return cls.FEMALE
        raise ValueError(f"unknown gender: {raw!r}")


class LuckDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PillarToken:
    stem: str
    branch: str

    @property
    def text(self) -> str:
        return f"{self.stem}{self.branch}"

    @classmethod
    def parse(cls, text: str) -> "PillarToken":
        cleaned = (text or "").strip()
        if len(cleaned) != 2:
            raise ValueError(f"invalid ganzhi text: {text!r}")
        return cls(stem=cleaned[0], branch=cleaned[1])


@dataclass(frozen=True)
class BirthMoment:
    year: int
    month: int
    day: int
    hour: int
    minute: int = 0
    second: int = 0


@dataclass(frozen=True)
class FourPillars:
    source: str
    moment: BirthMoment
    year: PillarToken
    month: PillarToken
    day: PillarToken
    hour: PillarToken

    @property
    def texts(self) -> tuple[str, str, str, str]:
        return (self.year.text, self.month.text, self.day.text, self.hour.text)


@dataclass(frozen=True)
class DecadeLuckEntry:
    start_age: int
    gan_zhi: str
    end_age: int | None = None
    start_year: int | None = None


@dataclass(frozen=True)
class AssemblyResult:
    pillars: FourPillars
    decade: DecadeLuckEntry
    warnings: tuple[Warning, ...] = ()

    @property
    def anomalous(self) -> bool:
        return bool(self.warnings)


# Recognized external field names mapped to ChartRecord attributes.
CHART_FIELDS: dict[str, str] = {
    "name": "name",
    "gender": "gender",
    "birthYear": "birth_year",
    "birthMonth": "birth_month",
    "birthDay": "birth_day",
    "birthHour": "birth_hour",
    "yearPillar": "year_pillar",
    "monthPillar": "month_pillar",
    "dayPillar": "day_pillar",
    "hourPillar": "hour_pillar",
    "startAge": "start_age",
    "firstDaYun": "first_da_yun",
}

BIRTH_FIELDS: tuple[str, ...] = ("birthYear", "birthMonth", "birthDay", "birthHour")


@dataclass(frozen=True)
class ChartRecord:
    name: str = ""
    gender: Gender = Gender.MALE
    birth_year: str = ""
    birth_month: str = ""
    birth_day: str = ""
    birth_hour: str = ""
    year_pillar: str = ""
    month_pillar: str = ""
    day_pillar: str = ""
    hour_pillar: str = ""
    start_age: str = ""
    first_da_yun: str = ""

    def to_payload(self) -> dict[str, str]:
        payload: dict[str, str] = {}
        for external, attr in CHART_FIELDS.items():
            value = getattr(self, attr)
            payload[external] = value.value if isinstance(value, Gender) else str(value)
        return payload

    @classmethod
    def from_payload(cls, payload: dict) -> "ChartRecord":
        kwargs: dict = {}
        for external, attr in CHART_FIELDS.items():
            if external not in payload or payload[external] is None:
                continue
            raw = payload[external]
            kwargs[attr] = Gender.parse(raw) if attr == "gender" else str(raw)
        return cls(**kwargs)
