from __future__ import annotations

from bazi_oracle.models import Gender, LuckDirection

YIN_STEMS: frozenset[str] = frozenset({"乙", "丁", "己", "辛", "癸"})

DIRECTION_LABELS: dict[LuckDirection, str] = {
    LuckDirection.FORWARD: "顺行 (阳男/阴女)",
    LuckDirection.BACKWARD: "逆行 (阴男/阳女)",
    LuckDirection.UNKNOWN: "等待排盘...",
}


def is_yang_stem(stem: str) -> bool:
    # Unrecognized characters count as Yang.
    return stem not in YIN_STEMS


def resolve_luck_direction(year_pillar: str | None, gender: Gender | str) -> LuckDirection:
    text = (year_pillar or "").strip()
    if not text:
        return LuckDirection.UNKNOWN
    yang = is_yang_stem(text[0])
    forward = yang if Gender.parse(gender) is Gender.MALE else not yang
    return LuckDirection.FORWARD if forward else LuckDirection.BACKWARD


def direction_label(direction: LuckDirection) -> str:
    return DIRECTION_LABELS[direction]
