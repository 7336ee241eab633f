"""학습 자료/배너 생성과 파일 업로드"""
import logging
import time
import uuid
from typing import Any

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import base as base_crud
from app.exceptions import BaseAppError, InvalidRequestError, RecordNotFoundError
from app.models.banner import Banner
from app.models.content import Content
from app.schemas.content import MaterialCreateForm, MaterialUpdateForm, MultiUploadResponse, UploadedFileResult
from app.services import storage_service
from app.utils.file_utils import (
    determine_content_type,
    file_size_mb,
    get_file_extension,
    random_suffix,
    sanitize_filename,
    sanitize_path_segment,
)

logger = logging.getLogger(__name__)


def _timestamp() -> int:
    return int(time.time() * 1000)


def _extension(filename: str) -> str:
    return sanitize_path_segment(get_file_extension(filename), default="bin")


def material_file_path(filename: str) -> str:
    return f"{_timestamp()}-{random_suffix()}.{_extension(filename)}"


def upload_file_path(filename: str, category: str) -> str:
    """uploads/{category}/{timestamp}-{rand}.{ext} (category는 경로 한 구간으로 정리)"""
    folder = sanitize_path_segment(category)
    return f"uploads/{folder}/{_timestamp()}-{random_suffix()}.{_extension(filename)}"


def banner_file_path(filename: str) -> str:
    return f"banners/banner-{random_suffix()}.{_extension(filename)}"


async def _store(file: UploadFile, path: str) -> tuple[str, int]:
    data = await file.read()
    url = await storage_service.upload_file(path, data, file.content_type or "application/octet-stream")
    return url, len(data)


async def create_material(
    session: AsyncSession,
    form: MaterialCreateForm,
    file: UploadFile | None = None,
) -> Content:
    """자료 생성. PDF는 업로드가 성공해야만 레코드를 만든다"""
    try:
        form.validate_source(has_file=file is not None)
    except ValueError as e:
        raise InvalidRequestError(str(e)) from e

    data: dict[str, Any] = form.model_dump()
    if file is not None:
        path = material_file_path(file.filename or "file.pdf")
        url, size = await _store(file, path)
        data.update(file_url=url, file_path=path, file_size=size, file_size_mb=file_size_mb(size))

    material = await base_crud.create_record(session, Content, data)
    logger.info(f"자료 생성: material_id={material.id}, type={material.type}")
    return material


async def update_material(
    session: AsyncSession,
    material_id: uuid.UUID,
    form: MaterialUpdateForm,
    file: UploadFile | None = None,
) -> Content:
    """자료 수정. 새 파일이 있으면 업로드 후 URL과 크기를 교체"""
    material = await base_crud.get_by_id(session, Content, material_id)
    if not material:
        raise RecordNotFoundError("Material", material_id)

    data = form.model_dump(exclude_unset=True)
    if file is not None:
        path = material_file_path(file.filename or "file")
        url, size = await _store(file, path)
        data.update(file_url=url, file_path=path, file_size=size, file_size_mb=file_size_mb(size))

    return await base_crud.update_record(session, material, data)


async def upload_materials(
    session: AsyncSession,
    files: list[UploadFile],
    category: str,
    is_free: bool,
) -> MultiUploadResponse:
    """여러 파일을 순서대로 업로드하고 파일마다 자료 레코드 생성

    한 파일의 실패는 결과에 기록하고 나머지는 계속 진행한다.
    """
    if not files:
        raise InvalidRequestError("No files to upload")

    results: list[UploadedFileResult] = []
    for file in files:
        filename = file.filename or "unnamed"
        try:
            path = upload_file_path(filename, category)
            url, size = await _store(file, path)
            material = await base_crud.create_record(
                session,
                Content,
                {
                    "title": sanitize_filename(filename),
                    "type": determine_content_type(file.content_type),
                    "language": "en",
                    "is_free": is_free,
                    "category": category,
                    "file_url": url,
                    "file_path": path,
                    "file_size": size,
                    "file_size_mb": file_size_mb(size),
                    "file_metadata": {
                        "mimeType": file.content_type,
                        "extension": get_file_extension(filename),
                    },
                },
            )
            results.append(UploadedFileResult(filename=filename, status="success", url=url, material_id=material.id))
        except (BaseAppError, SQLAlchemyError) as e:
            await session.rollback()
            message = e.message if isinstance(e, BaseAppError) else str(e)
            logger.warning(f"파일 업로드 실패: filename={filename}, error={message}")
            results.append(UploadedFileResult(filename=filename, status="error", error=message))

    uploaded = sum(1 for r in results if r.status == "success")
    logger.info(f"다중 업로드 완료: category={category}, uploaded={uploaded}, failed={len(results) - uploaded}")
    return MultiUploadResponse(uploaded=uploaded, failed=len(results) - uploaded, results=results)


async def create_banner(
    session: AsyncSession,
    image: UploadFile,
    title: str,
    target_type: str = "none",
    target_value: str | None = None,
    display_order: int = 0,
) -> Banner:
    """배너 이미지 업로드 후 활성 상태로 생성"""
    path = banner_file_path(image.filename or "banner.png")
    url, _ = await _store(image, path)
    banner = await base_crud.create_record(
        session,
        Banner,
        {
            "title": title,
            "image_url": url,
            "target_type": target_type,
            "target_value": target_value,
            "display_order": display_order,
            "is_active": True,
        },
    )
    logger.info(f"배너 생성: banner_id={banner.id}")
    return banner
