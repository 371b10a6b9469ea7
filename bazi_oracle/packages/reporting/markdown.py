from __future__ import annotations

from bazi_oracle.models import ChartRecord, Gender, LuckDirection
from bazi_oracle.packages.chart_engine.direction import direction_label

GENDER_LABELS = {Gender.MALE: "男", Gender.FEMALE: "女"}


def _or_dash(value: str) -> str:
    value = (value or "").strip()
    return value if value else "-"


def render_markdown(record: ChartRecord, direction: LuckDirection) -> str:
    title = f"# {record.name.strip()} 的八字排盘" if record.name.strip() else "# 八字排盘"
    birth = "{y}年{m}月{d}日 {h}时".format(
        y=_or_dash(record.birth_year),
        m=_or_dash(record.birth_month),
        d=_or_dash(record.birth_day),
        h=_or_dash(record.birth_hour),
    )
    lines: list[str] = [
        title,
        "",
        f"- 性别: {GENDER_LABELS[record.gender]}",
        f"- 出生时间(阳历): {birth}",
        "",
        "## 四柱",
        f"- 年柱: {_or_dash(record.year_pillar)}",
        f"- 月柱: {_or_dash(record.month_pillar)}",
        f"- 日柱: {_or_dash(record.day_pillar)}",
        f"- 时柱: {_or_dash(record.hour_pillar)}",
        "",
        "## 大运",
        f"- 起运年龄(虚岁): {_or_dash(record.start_age)}",
        f"- 第一步大运: {_or_dash(record.first_da_yun)}",
        f"- 大运排序: {direction_label(direction)}",
        "",
    ]
    return "\n".join(lines)
