import logging

import httpx

from app.core.config import settings
from app.exceptions import StorageUploadError

logger = logging.getLogger(__name__)

_storage_client: "StorageClient | None" = None


class StorageClient:
    """오브젝트 스토리지 REST API 클라이언트 (업로드, 공개 URL)"""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.timeout = timeout
        self._transport = transport

    def _headers(self, content_type: str, upsert: bool) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
            "Content-Type": content_type,
            "x-upsert": "true" if upsert else "false",
            "cache-control": "max-age=3600",
        }

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        upsert: bool = False,
    ) -> str:
        """파일 업로드 후 저장 경로 반환"""
        url = f"{self.base_url}/object/{bucket}/{path}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(url, content=data, headers=self._headers(content_type, upsert))
            except httpx.HTTPError as e:
                logger.error(f"스토리지 요청 실패: path={path}, error={e}")
                raise StorageUploadError(str(e)) from e

        if response.is_error:
            message = _error_message(response)
            logger.error(f"스토리지 업로드 실패: status={response.status_code}, path={path}, message={message}")
            raise StorageUploadError(message)

        logger.info(f"스토리지 업로드 완료: bucket={bucket}, path={path}, size={len(data)}")
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/object/public/{bucket}/{path}"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


def get_storage_client() -> StorageClient:
    """스토리지 클라이언트 싱글톤"""
    global _storage_client
    if _storage_client is None:
        if not settings.storage_service_key:
            logger.warning("STORAGE_SERVICE_KEY가 설정되지 않았습니다")
        _storage_client = StorageClient(settings.storage_url, settings.storage_service_key)
    return _storage_client


async def upload_file(path: str, data: bytes, content_type: str) -> str:
    """기본 버킷에 업로드하고 공개 URL 반환"""
    client = get_storage_client()
    await client.upload(settings.storage_bucket, path, data, content_type)
    return client.get_public_url(settings.storage_bucket, path)
