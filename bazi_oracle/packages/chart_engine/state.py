from __future__ import annotations

from dataclasses import replace
from typing import Callable

from bazi_oracle.models import CHART_FIELDS, AssemblyResult, ChartRecord, Gender

SubmitCallback = Callable[[ChartRecord], None]


class BlockedError(RuntimeError):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ChartState:
    """Single-writer holder of the session's ChartRecord.

    The record is immutable; every mutation swaps in a new instance, so a
    derivation merge is observed either fully or not at all.
    """

    def __init__(self, record: ChartRecord | None = None) -> None:
        self._record = record or ChartRecord()
        self._loading = False

    @property
    def record(self) -> ChartRecord:
        return self._record

    @property
    def loading(self) -> bool:
        return self._loading

    def set_loading(self, flag: bool) -> None:
        self._loading = bool(flag)

    def apply_user_edit(self, field: str, value: object) -> ChartRecord:
        attr = CHART_FIELDS.get(field)
        if attr is None:
            raise KeyError(f"unknown chart field: {field}")
        if attr == "gender":
            new_value: object = Gender.parse(value)  # type: ignore[arg-type]
        else:
            new_value = "" if value is None else str(value)
        self._record = replace(self._record, **{attr: new_value})
        return self._record

    def apply_derivation(self, result: AssemblyResult) -> ChartRecord:
        year, month, day, hour = result.pillars.texts
        self._record = replace(
            self._record,
            year_pillar=year,
            month_pillar=month,
            day_pillar=day,
            hour_pillar=hour,
            start_age=str(result.decade.start_age),
            first_da_yun=result.decade.gan_zhi,
        )
        return self._record

    def is_submittable(self) -> bool:
        return bool(self._record.year_pillar.strip()) and bool(self._record.first_da_yun.strip())

    def try_submit(self, on_submit: SubmitCallback) -> ChartRecord:
        if self._loading:
            raise BlockedError("in_flight")
        if not self.is_submittable():
            raise BlockedError("incomplete_chart")
        snapshot = self._record
        self._loading = True
        try:
            on_submit(snapshot)
        except Exception:
            self._loading = False
            raise
        return snapshot
