"""스프레드시트 파싱/템플릿 테스트"""
import io

import pandas as pd
import pytest

from app.exceptions import SpreadsheetParseError
from app.services import import_service
from app.utils.spreadsheet import QUESTION_COLUMNS, TEMPLATE_SHEET_NAME, build_question_template, parse_spreadsheet


CSV_CONTENT = (
    "question_en,option_a_en,option_b_en,option_c_en,option_d_en,correct_option,subject,difficulty\n"
    "  What is 10 x 10? ,100,10,1000,1,A,Maths,\n"
    "Capital of France?,Paris,Rome,Berlin,Madrid,e,GK,hard\n"
).encode("utf-8")


def test_parse_csv_strips_values_and_drops_empty_cells():
    rows = parse_spreadsheet("questions.csv", CSV_CONTENT)

    assert len(rows) == 2
    assert rows[0]["question_en"] == "What is 10 x 10?"
    assert rows[0]["correct_option"] == "A"
    assert "difficulty" not in rows[0]
    assert rows[1]["difficulty"] == "hard"


def test_parsed_csv_feeds_validation():
    result = import_service.validate_rows(parse_spreadsheet("questions.csv", CSV_CONTENT))

    assert len(result.valid) == 1
    assert result.valid[0].difficulty == "medium"
    assert result.errors == ["Row 3: Invalid correct_option (must be a, b, c, or d)"]


def test_parse_unsupported_extension():
    with pytest.raises(SpreadsheetParseError):
        parse_spreadsheet("questions.pdf", b"%PDF-1.4")


def test_parse_malformed_workbook():
    with pytest.raises(SpreadsheetParseError) as exc_info:
        parse_spreadsheet("questions.xlsx", b"not a zip archive")
    assert exc_info.value.status_code == 400


def test_question_template_layout():
    """양식은 Questions 시트에 헤더 + 샘플 1행"""
    content = build_question_template()

    df = pd.read_excel(io.BytesIO(content), sheet_name=TEMPLATE_SHEET_NAME, dtype=str)
    assert list(df.columns) == QUESTION_COLUMNS
    assert len(df) == 1
    assert df.iloc[0]["correct_option"] == "b"


def test_question_template_rows_are_valid():
    rows = parse_spreadsheet("template.xlsx", build_question_template())
    result = import_service.validate_rows(rows)
    assert result.errors == []
    assert result.valid[0].subject == "General Knowledge"


def test_parse_csv_keeps_na_like_text():
    """'None', 'NA' 같은 값은 빈 셀이 아니라 보기 텍스트"""
    content = (
        "question_en,option_a_en,option_b_en,option_c_en,option_d_en,correct_option,subject\n"
        "Which is prime?,4,6,8,None,d,Maths\n"
        "Which option fits?,NA,null,N/A,,a,Reasoning\n"
    ).encode("utf-8")

    rows = parse_spreadsheet("questions.csv", content)
    assert rows[0]["option_d_en"] == "None"
    assert rows[1]["option_a_en"] == "NA"
    assert "option_d_en" not in rows[1]

    result = import_service.validate_rows(rows)
    assert result.valid[0].option_d == "None"
    assert result.errors == ["Row 3: Missing options"]


def test_parse_xlsx_keeps_na_like_text():
    df = pd.DataFrame(
        [
            {
                "question_en": "Pick the valid entry",
                "option_a_en": "NA",
                "option_b_en": "N/A",
                "option_c_en": "nan",
                "option_d_en": "#N/A",
                "correct_option": "a",
                "subject": "None",
            }
        ]
    )
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, index=False)

    result = import_service.validate_rows(parse_spreadsheet("questions.xlsx", buffer.getvalue()))

    assert result.errors == []
    question = result.valid[0]
    assert (question.option_a, question.option_b, question.option_c, question.option_d) == ("NA", "N/A", "nan", "#N/A")
    assert question.subject == "None"
