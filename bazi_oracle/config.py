from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ChartSettings:
    zi_hour_sect: int = 2
    yun_sect: int = 1
    log_level: str = "INFO"


def _sect(raw: str | None, *, default: int) -> int:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return default
    return value if value in (1, 2) else default


def load_settings() -> ChartSettings:
    log_level = (os.environ.get("BAZI_ORACLE_LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        log_level = "INFO"

    return ChartSettings(
        zi_hour_sect=_sect(os.environ.get("BAZI_ORACLE_ZI_HOUR_SECT"), default=2),
        yun_sect=_sect(os.environ.get("BAZI_ORACLE_YUN_SECT"), default=1),
        log_level=log_level,
    )
