from __future__ import annotations

import logging
from enum import IntEnum
from typing import Protocol

from bazi_oracle.models import AssemblyResult, BirthMoment, DecadeLuckEntry, FourPillars, Gender
from bazi_oracle.packages.calendar_engine.base import CalendarConversionError, gender_code

logger = logging.getLogger(__name__)


class DecadeAnomalyWarning(UserWarning):
    pass


class DecadeSlot(IntEnum):
    # The bridge always emits the child-limit period ahead of the formal decades.
    CHILD_LIMIT = 0
    FIRST_FORMAL = 1


FALLBACK_DECADE = DecadeLuckEntry(start_age=1, gan_zhi="")


class Bridge(Protocol):
    """Calendar capability consumed by ``assemble``.

    Implementations report a rejected or unconvertible moment by raising
    ``CalendarConversionError``. Anything else they raise is rewrapped as
    ``CalendarConversionError`` by ``assemble``.
    """

    def to_four_pillars(self, moment: BirthMoment) -> FourPillars: ...

    def to_decade_luck_sequence(self, pillars: FourPillars, gender_code: int) -> list[DecadeLuckEntry]: ...


def select_first_decade(sequence: list[DecadeLuckEntry]) -> DecadeLuckEntry | None:
    if len(sequence) > DecadeSlot.FIRST_FORMAL:
        return sequence[DecadeSlot.FIRST_FORMAL]
    return None


def assemble(*, bridge: Bridge, moment: BirthMoment, gender: Gender) -> AssemblyResult:
    """Run the bridge and pick the first formal decade.

    Every bridge failure leaves as ``CalendarConversionError``; nothing here
    writes to chart state. A decade sequence without a formal period is
    not an error: the fallback decade is used and a ``DecadeAnomalyWarning``
    travels on the result.
    """
    try:
        pillars = bridge.to_four_pillars(moment)
        sequence = list(bridge.to_decade_luck_sequence(pillars, gender_code(gender)))
    except CalendarConversionError:
        raise
    except Exception as exc:
        raise CalendarConversionError(f"calendar bridge failed: {exc}") from exc

    decade = select_first_decade(sequence)
    if decade is not None:
        return AssemblyResult(pillars=pillars, decade=decade)

    warning = DecadeAnomalyWarning(f"decade luck sequence too short: len={len(sequence)}")
    logger.warning("decade anomaly for %s (%s): %s", moment, gender.value, warning)
    return AssemblyResult(pillars=pillars, decade=FALLBACK_DECADE, warnings=(warning,))
