from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from bazi_oracle.config import ChartSettings
from bazi_oracle.models import AssemblyResult, BirthMoment, ChartRecord, LuckDirection
from bazi_oracle.packages.calendar_engine.base import CalendarConversionError
from bazi_oracle.packages.calendar_engine.service import CalendarService
from bazi_oracle.packages.chart_engine.assembler import Bridge, assemble
from bazi_oracle.packages.chart_engine.direction import direction_label, resolve_luck_direction
from bazi_oracle.packages.chart_engine.state import BlockedError, ChartState, SubmitCallback
from bazi_oracle.packages.chart_engine.validator import MissingFieldError, validate

MSG_MISSING_FIELDS = "请填写完整的出生年月日时（阳历）"
MSG_DECADE_ANOMALY = "八字排盘成功，但大运计算异常，请手动检查"
MSG_CHART_INCOMPLETE = "请先进行自动排盘或手动填写四柱信息"
MSG_IN_FLIGHT = "正在推演中，请稍候"

SUBMIT_LABEL = "生成人生K线"
LOADING_LABEL = "大师推演中(3-5分钟)"


@dataclass(frozen=True)
class Notification:
    level: str
    code: str
    message: str


Notifier = Callable[[Notification], None]


def _to_moment(record: ChartRecord) -> BirthMoment:
    values: list[int] = []
    for name, raw in (
        ("birthYear", record.birth_year),
        ("birthMonth", record.birth_month),
        ("birthDay", record.birth_day),
        ("birthHour", record.birth_hour),
    ):
        try:
            values.append(int(str(raw).strip()))
        except ValueError as exc:
            raise CalendarConversionError(f"{name} is not an integer: {raw!r}") from exc
    year, month, day, hour = values
    return BirthMoment(year=year, month=month, day=day, hour=hour)


class ChartSession:
    def __init__(
        self,
        settings: ChartSettings,
        *,
        bridge: Bridge | None = None,
        on_submit: SubmitCallback | None = None,
        notifier: Notifier | None = None,
        record: ChartRecord | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings
        self.bridge: Bridge = bridge if bridge is not None else CalendarService.from_settings(settings)
        self.state = ChartState(record)
        self.notifications: list[Notification] = []
        self._on_submit = on_submit
        self._notifier = notifier
        self._logger = logger or logging.getLogger(__name__)

    @property
    def record(self) -> ChartRecord:
        return self.state.record

    @property
    def direction(self) -> LuckDirection:
        return resolve_luck_direction(self.record.year_pillar, self.record.gender)

    @property
    def direction_label(self) -> str:
        return direction_label(self.direction)

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def action_label(self) -> str:
        return LOADING_LABEL if self.state.loading else SUBMIT_LABEL

    def _notify(self, level: str, code: str, message: str) -> None:
        note = Notification(level=level, code=code, message=message)
        self.notifications.append(note)
        self._logger.log(logging.ERROR if level == "error" else logging.WARNING, "%s: %s", code, message)
        if self._notifier is not None:
            self._notifier(note)

    def edit(self, field: str, value: object) -> ChartRecord:
        return self.state.apply_user_edit(field, value)

    def set_loading(self, flag: bool) -> None:
        self.state.set_loading(flag)

    def complete_submission(self) -> None:
        self.state.set_loading(False)

    def derive(self) -> AssemblyResult | None:
        if self.state.loading:
            self._notify("warning", "submission_in_flight", MSG_IN_FLIGHT)
            return None

        record = self.record
        try:
            validate(record.birth_year, record.birth_month, record.birth_day, record.birth_hour)
        except MissingFieldError as exc:
            self._notify("error", "missing_birth_fields", f"{MSG_MISSING_FIELDS} ({','.join(exc.missing)})")
            return None

        try:
            moment = _to_moment(record)
            result = assemble(bridge=self.bridge, moment=moment, gender=record.gender)
        except CalendarConversionError as exc:
            self._notify("error", "calendar_conversion_failed", f"自动排盘失败: {exc}")
            return None

        self.state.apply_derivation(result)
        self._logger.info(
            "derived chart %s start_age=%s first_da_yun=%s source=%s",
            "".join(result.pillars.texts),
            result.decade.start_age,
            result.decade.gan_zhi or "-",
            result.pillars.source,
        )
        if result.anomalous:
            self._notify("warning", "decade_anomaly", MSG_DECADE_ANOMALY)
        return result

    def submit(self, on_submit: SubmitCallback | None = None) -> ChartRecord | None:
        """Hand the chart to ``on_submit``, or to the consumer given at construction.

        A session built for derivation only has no consumer; calling this
        without one raises ``TypeError`` before the chart state is touched.
        """
        consumer = on_submit if on_submit is not None else self._on_submit
        if consumer is None:
            raise TypeError("submit() needs an on_submit consumer: pass one here or to ChartSession(on_submit=...)")
        try:
            snapshot = self.state.try_submit(consumer)
        except BlockedError as exc:
            if exc.reason == "in_flight":
                self._notify("warning", "submission_in_flight", MSG_IN_FLIGHT)
            else:
                self._notify("error", "chart_incomplete", MSG_CHART_INCOMPLETE)
            return None
        self._logger.info("chart submitted year_pillar=%s first_da_yun=%s", snapshot.year_pillar, snapshot.first_da_yun)
        return snapshot
