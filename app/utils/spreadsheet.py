"""문제 일괄 업로드용 스프레드시트 읽기/템플릿 생성 (pandas + openpyxl)"""
import io
import logging
from typing import Any

import pandas as pd

from app.exceptions import SpreadsheetParseError

logger = logging.getLogger(__name__)

# 업로드 파일의 헤더 (1행)
QUESTION_COLUMNS = [
    "question_en",
    "question_hi",
    "option_a_en",
    "option_a_hi",
    "option_b_en",
    "option_b_hi",
    "option_c_en",
    "option_c_hi",
    "option_d_en",
    "option_d_hi",
    "correct_option",
    "subject",
    "difficulty",
    "explanation_en",
    "explanation_hi",
]

SUPPORTED_EXTENSIONS = ("csv", "xlsx", "xls")

TEMPLATE_SHEET_NAME = "Questions"

TEMPLATE_SAMPLE_ROW = {
    "question_en": "What is the capital of India?",
    "question_hi": "भारत की राजधानी क्या है?",
    "option_a_en": "Mumbai",
    "option_a_hi": "मुंबई",
    "option_b_en": "New Delhi",
    "option_b_hi": "नई दिल्ली",
    "option_c_en": "Kolkata",
    "option_c_hi": "कोलकाता",
    "option_d_en": "Chennai",
    "option_d_hi": "चेन्नई",
    "correct_option": "b",
    "subject": "General Knowledge",
    "difficulty": "easy",
    "explanation_en": "New Delhi is the capital of India.",
    "explanation_hi": "नई दिल्ली भारत की राजधानी है।",
}


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def _clean(value: Any) -> str | None:
    """빈 셀(NaN, 공백)은 None, 그 외 값은 앞뒤 공백을 제거한 문자열"""
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def parse_spreadsheet(filename: str, content: bytes) -> list[dict[str, str | None]]:
    """업로드 파일의 첫 시트를 행 dict 목록으로 변환

    값이 없는 셀은 키를 생략한다. 읽을 수 없는 파일은 DB 호출 전에
    SpreadsheetParseError를 발생시킨다.
    """
    ext = _extension(filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise SpreadsheetParseError(f"지원하지 않는 파일 형식입니다: .{ext or '?'} (csv, xlsx, xls만 가능)")

    buffer = io.BytesIO(content)
    # "None", "NA", "null" 같은 셀 값도 문자열 그대로 유지 (빈 셀만 누락으로 취급)
    try:
        if ext == "csv":
            df = pd.read_csv(buffer, dtype=str, keep_default_na=False, na_filter=False)
        else:
            engine = "openpyxl" if ext == "xlsx" else None
            df = pd.read_excel(buffer, sheet_name=0, dtype=str, engine=engine, keep_default_na=False)
    except Exception as e:
        logger.warning(f"스프레드시트 파싱 실패: filename={filename}, error={e}")
        raise SpreadsheetParseError() from e

    df.columns = [str(column).strip() for column in df.columns]

    rows: list[dict[str, str | None]] = []
    for record in df.to_dict(orient="records"):
        row = {}
        for key, value in record.items():
            cleaned = _clean(value)
            if cleaned is not None:
                row[key] = cleaned
        rows.append(row)

    logger.info(f"스프레드시트 파싱 완료: filename={filename}, rows={len(rows)}")
    return rows


def build_question_template() -> bytes:
    """샘플 1행이 들어간 업로드 양식(.xlsx)"""
    df = pd.DataFrame([TEMPLATE_SAMPLE_ROW], columns=QUESTION_COLUMNS)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=TEMPLATE_SHEET_NAME, index=False)
    return buffer.getvalue()
