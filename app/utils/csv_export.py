import csv
import io
import json
from datetime import datetime
from typing import Any, Iterable, Sequence


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def to_csv(headers: Sequence[str], rows: Iterable[dict[str, Any]]) -> str:
    """헤더 + 행 단위 CSV 문자열

    쉼표, 큰따옴표, 줄바꿈이 들어간 값만 따옴표로 감싼다 (내부 따옴표는 두 번).
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_format_value(row.get(header)) for header in headers])
    return output.getvalue()


def export_filename(name: str, now: datetime | None = None) -> str:
    """다운로드 파일명: {name}-{timestamp}.csv"""
    now = now or datetime.now()
    return f"{name}-{now.strftime('%Y%m%d-%H%M%S')}.csv"
