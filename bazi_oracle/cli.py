from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from bazi_oracle.config import load_settings
from bazi_oracle.models import ChartRecord
from bazi_oracle.packages.reporting.markdown import render_markdown
from bazi_oracle.service import ChartSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Derive a four-pillar chart and its first decade luck")
    parser.add_argument("--task", choices=["derive", "submit"], default="derive")
    parser.add_argument("--name", default="")
    parser.add_argument("--gender", default="male")
    parser.add_argument("--year", default="")
    parser.add_argument("--month", default="")
    parser.add_argument("--day", default="")
    parser.add_argument("--hour", default="")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        help="manual field override applied after derivation, e.g. firstDaYun=壬午",
    )
    parser.add_argument("--skip-derive", action="store_true", help="use only manually entered fields")
    parser.add_argument("--output-dir", default="bazi_oracle/output")
    return parser


def _parse_override(raw: str) -> tuple[str, str]:
    field, sep, value = raw.partition("=")
    if not sep or not field.strip():
        raise ValueError(f"override must be FIELD=VALUE: {raw!r}")
    return field.strip(), value.strip()


def _build_session(args: argparse.Namespace, **kwargs) -> ChartSession:
    settings = load_settings()
    record = ChartRecord.from_payload(
        {
            "name": args.name,
            "gender": args.gender,
            "birthYear": args.year,
            "birthMonth": args.month,
            "birthDay": args.day,
            "birthHour": args.hour,
        }
    )
    return ChartSession(settings, record=record, **kwargs)


def _prepare(session: ChartSession, args: argparse.Namespace) -> bool:
    if not args.skip_derive and session.derive() is None:
        return False
    for raw in args.overrides:
        field, value = _parse_override(raw)
        session.edit(field, value)
    return True


def _chart_payload(session: ChartSession) -> dict:
    return {
        "chart": session.record.to_payload(),
        "direction": session.direction.value,
        "direction_label": session.direction_label,
        "notifications": [
            {"level": n.level, "code": n.code, "message": n.message} for n in session.notifications
        ],
    }


def _report_errors(session: ChartSession) -> int:
    for note in session.notifications:
        print(f"{note.level}: {note.code}: {note.message}")
    return 1


def _run_derive(args: argparse.Namespace) -> int:
    session = _build_session(args)
    if not _prepare(session, args):
        return _report_errors(session)
    print(json.dumps(_chart_payload(session), ensure_ascii=False, indent=2))
    return 0


def _run_submit(args: argparse.Namespace, *, out_dir: Path) -> int:
    report_path = out_dir / "report.md"
    chart_path = out_dir / "chart.json"

    def consume(chart: ChartRecord) -> None:
        report_path.write_text(render_markdown(chart, session.direction), encoding="utf-8")
        chart_path.write_text(json.dumps(_chart_payload(session), ensure_ascii=False, indent=2), encoding="utf-8")

    session = _build_session(args, on_submit=consume)
    if not _prepare(session, args):
        return _report_errors(session)
    if session.submit() is None:
        return _report_errors(session)
    session.complete_submission()

    print(f"report={report_path}")
    print(f"chart={chart_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=load_settings().log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.task == "derive":
            return _run_derive(args)
        if args.task == "submit":
            out_dir = Path(args.output_dir)
            out_dir.mkdir(parents=True, exist_ok=True)
            return _run_submit(args, out_dir=out_dir)
    except (KeyError, ValueError) as exc:
        message = exc.args[0] if exc.args else str(exc)
        print(f"error: invalid_input: {message}")
        return 1
    raise ValueError(f"unsupported task: {args.task}")


if __name__ == "__main__":
    raise SystemExit(main())
