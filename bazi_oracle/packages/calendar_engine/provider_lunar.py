from __future__ import annotations

from typing import Any

from bazi_oracle.models import BirthMoment, DecadeLuckEntry, FourPillars, PillarToken

from .base import CalendarBridge, CalendarConversionError


def _split_ganzhi(text: str) -> PillarToken:
    try:
        return PillarToken.parse(text)
    except ValueError as exc:
        raise CalendarConversionError(str(exc)) from exc


class LunarPythonBridge(CalendarBridge):
    def __init__(self, *, zi_hour_sect: int = 2, yun_sect: int = 1) -> None:
        super().__init__(name="lunar-python")
        self._zi_hour_sect = int(zi_hour_sect)
        self._yun_sect = int(yun_sect)

    def _eight_char(self, moment: BirthMoment) -> Any:
        from lunar_python import Solar  # type: ignore

        solar = Solar.fromYmdHms(
            moment.year,
            moment.month,
            moment.day,
            moment.hour,
            moment.minute,
            moment.second,
        )
        eight_char = solar.getLunar().getEightChar()
        eight_char.setSect(self._zi_hour_sect)
        return eight_char

    def to_four_pillars(self, moment: BirthMoment) -> FourPillars:
        try:
            eight_char = self._eight_char(moment)
            year, month, day, hour = (
                eight_char.getYear(),
                eight_char.getMonth(),
                eight_char.getDay(),
                eight_char.getTime(),
            )
        except Exception as exc:
            raise CalendarConversionError(f"{self.name} conversion failed: {exc}") from exc
        return FourPillars(
            source=f"{self.name}:zi_sect={self._zi_hour_sect}",
            moment=moment,
            year=_split_ganzhi(year),
            month=_split_ganzhi(month),
            day=_split_ganzhi(day),
            hour=_split_ganzhi(hour),
        )

    def to_decade_luck_sequence(self, pillars: FourPillars, gender_code: int) -> list[DecadeLuckEntry]:
        if gender_code not in (0, 1):
            raise CalendarConversionError(f"invalid gender code: {gender_code!r}")
        try:
            yun = self._eight_char(pillars.moment).getYun(gender_code, self._yun_sect)
            return [
                DecadeLuckEntry(
                    start_age=int(da_yun.getStartAge()),
                    gan_zhi=str(da_yun.getGanZhi() or ""),
                    end_age=int(da_yun.getEndAge()),
                    start_year=int(da_yun.getStartYear()),
                )
                for da_yun in yun.getDaYun()
            ]
        except Exception as exc:
            raise CalendarConversionError(f"{self.name} decade luck failed: {exc}") from exc
