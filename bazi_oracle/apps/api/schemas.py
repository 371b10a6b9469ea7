from __future__ import annotations

from pydantic import BaseModel, Field


class ChartPayload(BaseModel):
    name: str = ""
    gender: str = "male"
    birthYear: str | int = ""
    birthMonth: str | int = ""
    birthDay: str | int = ""
    birthHour: str | int = ""
    yearPillar: str = ""
    monthPillar: str = ""
    dayPillar: str = ""
    hourPillar: str = ""
    startAge: str | int = ""
    firstDaYun: str = ""


class DeriveResponse(BaseModel):
    chart: dict[str, str]
    direction: str
    direction_label: str
    warnings: list[str] = Field(default_factory=list)


class SubmitResponse(BaseModel):
    ok: bool
    chart: dict[str, str]
    direction_label: str
    report_markdown: str = Field(..., description="Rendered chart markdown")
