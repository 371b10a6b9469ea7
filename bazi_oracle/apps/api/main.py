from __future__ import annotations

from fastapi import FastAPI

from .routes.chart import router as chart_router

app = FastAPI(title="bazi_oracle API", version="0.1.0")
app.include_router(chart_router)


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "1"}
