from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from bazi_oracle.apps.api.schemas import ChartPayload, DeriveResponse, SubmitResponse
from bazi_oracle.config import ChartSettings, load_settings
from bazi_oracle.models import ChartRecord
from bazi_oracle.packages.chart_engine.assembler import Bridge
from bazi_oracle.packages.reporting.markdown import render_markdown
from bazi_oracle.service import ChartSession, Notification

router = APIRouter(prefix="/api/chart", tags=["chart"])

_ERROR_STATUS = {
    "missing_birth_fields": 422,
    "calendar_conversion_failed": 422,
    "chart_incomplete": 409,
    "submission_in_flight": 409,
}


def get_settings() -> ChartSettings:
    return load_settings()


def get_bridge() -> Bridge | None:
    return None


def _record_from(payload: ChartPayload) -> ChartRecord:
    try:
        return ChartRecord.from_payload(payload.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=f"invalid_chart:{exc}") from exc


def _raise_for(note: Notification) -> None:
    status = _ERROR_STATUS.get(note.code, 500)
    raise HTTPException(status_code=status, detail=f"{note.code}:{note.message}")


@router.post("/derive", response_model=DeriveResponse)
def derive_chart(
    payload: ChartPayload,
    settings: ChartSettings = Depends(get_settings),
    bridge: Bridge | None = Depends(get_bridge),
) -> DeriveResponse:
    session = ChartSession(settings, bridge=bridge, record=_record_from(payload))
    try:
        result = session.derive()
    except Exception as exc:
        raise HTTPException(status_code=500, detail=f"derive_failed:{exc}") from exc

    if result is None:
        _raise_for(session.notifications[-1])

    return DeriveResponse(
        chart=session.record.to_payload(),
        direction=session.direction.value,
        direction_label=session.direction_label,
        warnings=[note.message for note in session.notifications if note.level == "warning"],
    )


@router.post("/submit", response_model=SubmitResponse)
def submit_chart(payload: ChartPayload, settings: ChartSettings = Depends(get_settings)) -> SubmitResponse:
    reports: list[str] = []

    def consume(chart: ChartRecord) -> None:
        reports.append(render_markdown(chart, session.direction))

    session = ChartSession(settings, on_submit=consume, record=_record_from(payload))
    snapshot = session.submit()
    if snapshot is None:
        _raise_for(session.notifications[-1])
    session.complete_submission()

    return SubmitResponse(
        ok=True,
        chart=snapshot.to_payload(),
        direction_label=session.direction_label,
        report_markdown=reports[0],
    )
