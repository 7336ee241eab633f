"""커스텀 예외 클래스 정의"""


class BaseAppError(Exception):
    """애플리케이션 기본 예외 클래스"""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class RecordNotFoundError(BaseAppError):
    """레코드를 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, resource: str, record_id):
        self.resource = resource
        self.record_id = record_id
        super().__init__(f"{resource}을(를) 찾을 수 없습니다: {record_id}", status_code=404)


class InvalidRequestError(BaseAppError):
    """잘못된 요청일 때 발생하는 예외 (400)"""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class SpreadsheetParseError(BaseAppError):
    """스프레드시트 파일을 읽을 수 없을 때 발생하는 예외 (400)"""

    def __init__(self, message: str = "Failed to parse file"):
        super().__init__(message, status_code=400)


class ImportValidationError(BaseAppError):
    """검증 오류가 남아 있는 상태로 업로드를 시도할 때 발생하는 예외 (400)"""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"검증 오류 {len(errors)}건을 수정한 뒤 다시 업로드하세요",
            status_code=400,
        )


class BatchInsertError(BaseAppError):
    """일괄 입력 중 배치 하나가 실패했을 때 발생하는 예외 (500)

    phase는 "questions" 또는 "links", batch_number는 1부터 시작한다.
    """

    def __init__(self, phase: str, batch_number: int, total_batches: int, detail: str):
        self.phase = phase
        self.batch_number = batch_number
        self.total_batches = total_batches
        self.detail = detail
        super().__init__(
            f"{phase} 배치 {batch_number}/{total_batches} 입력 실패: {detail}",
            status_code=500,
        )


class StorageUploadError(BaseAppError):
    """오브젝트 스토리지 업로드 실패 (502)"""

    def __init__(self, message: str):
        super().__init__(f"Upload failed: {message}", status_code=502)


class AuthenticationError(BaseAppError):
    """인증 토큰이 없거나 유효하지 않을 때 (401)"""

    def __init__(self, message: str = "인증이 필요합니다"):
        super().__init__(message, status_code=401)


class AdminRequiredError(BaseAppError):
    """관리자 권한이 없는 사용자 (403)"""

    def __init__(self, message: str = "관리자 권한이 필요합니다"):
        super().__init__(message, status_code=403)
