from __future__ import annotations

from bazi_oracle.models import BIRTH_FIELDS


class MissingFieldError(ValueError):
    def __init__(self, missing: tuple[str, ...]) -> None:
        super().__init__(f"missing birth fields: {','.join(missing)}")
        self.missing = missing


def _present(value: object) -> bool:
    if value is None:
        return False
    return str(value).strip() != ""


def validate(birth_year: object, birth_month: object, birth_day: object, birth_hour: object) -> None:
    """Presence check only; ranges and calendar validity belong to the calendar bridge.

    Hour ``0`` is a present value.
    """
    values = (birth_year, birth_month, birth_day, birth_hour)
    missing = tuple(name for name, value in zip(BIRTH_FIELDS, values) if not _present(value))
    if missing:
        raise MissingFieldError(missing)
