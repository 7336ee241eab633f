"""업로드 파일 이름/유형/크기 헬퍼"""
import re
import secrets
import string

DOCUMENT_MIME_TYPES = (
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
)

_RANDOM_ALPHABET = string.ascii_lowercase + string.digits


def get_file_extension(filename: str) -> str:
    """확장자 (점 제외, 소문자). 없으면 빈 문자열"""
    parts = filename.split(".")
    return parts[-1].lower() if len(parts) > 1 else ""


def sanitize_filename(filename: str) -> str:
    """확장자를 떼고 영문/숫자/-/_ 외 문자를 _로 치환"""
    name = re.sub(r"\.[^/.]+$", "", filename)
    name = re.sub(r"[^a-zA-Z0-9\-_]", "_", name)
    name = re.sub(r"_+", "_", name).strip("_")
    return name or "unnamed_file"


def sanitize_path_segment(value: str, default: str = "general") -> str:
    """스토리지 경로 한 구간으로 쓸 수 있게 영문/숫자/-/_ 외 문자를 _로 치환 (/, .. 제거)"""
    segment = re.sub(r"[^a-zA-Z0-9\-_]", "_", value or "")
    segment = re.sub(r"_+", "_", segment).strip("_")
    return segment or default


def determine_content_type(mime_type: str | None) -> str:
    """MIME 타입으로 자료 유형 결정"""
    mime_type = mime_type or ""
    if mime_type == "application/pdf":
        return "pdf"
    if mime_type.startswith("image/"):
        return "image"
    if mime_type.startswith("video/"):
        return "video"
    if mime_type.startswith("audio/"):
        return "audio"
    if mime_type in DOCUMENT_MIME_TYPES:
        return "document"
    return "other"


def format_file_size(size: int) -> str:
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    index = 0
    value = float(size)
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


def file_size_mb(size: int) -> float:
    return round(size / (1024 * 1024), 2)


def random_suffix(length: int = 6) -> str:
    """저장 경로 충돌 방지용 짧은 랜덤 문자열"""
    return "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(length))
