import mimetypes
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from loguru import logger

from lms_backend.core.enum import FileEntity
from lms_backend.services.shares.storage import (
    InvalidStoragePath,
    LocalStorageService,
    get_storage_service,
    is_allowed_image,
)

router = APIRouter(tags=["Uploads"])

FILE_KINDS = frozenset(entity.value for entity in FileEntity)


def _failed(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "message": message}
    )


async def _upload_image(
    kind: str,
    entity_id: Optional[str],
    image: Optional[UploadFile],
    storage: LocalStorageService,
) -> JSONResponse:
    # no id means the entity is about to be created
    entity_id = entity_id or str(uuid.uuid4())

    if image is None:
        return _failed(status.HTTP_400_BAD_REQUEST, "image data not found")

    allowed, message = is_allowed_image(image.filename, image.content_type)
    if not allowed:
        return _failed(status.HTTP_400_BAD_REQUEST, message)

    try:
        file_name = await storage.save_image(entity_id, kind, image)
    except InvalidStoragePath:
        return _failed(status.HTTP_400_BAD_REQUEST, f"{kind}_id is invalid")
    except OSError as e:
        logger.error(f"❌ Save {kind} image failed: {e}")
        return _failed(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")

    logger.info(f"🖼 Stored {kind} image {file_name} for {entity_id}")
    return JSONResponse(
        content={
            "success": True,
            "message": "Upload success",
            f"{kind}_id": entity_id,
            "file_name": file_name,
        }
    )


@router.post("/course/upload")
async def upload_course_image(
    image: Optional[UploadFile] = File(None),
    course_id: Optional[str] = Form(None),
    storage: LocalStorageService = Depends(get_storage_service),
):
    return await _upload_image(FileEntity.COURSE.value, course_id, image, storage)


@router.post("/store/upload")
async def upload_store_image(
    image: Optional[UploadFile] = File(None),
    store_id: Optional[str] = Form(None),
    storage: LocalStorageService = Depends(get_storage_service),
):
    return await _upload_image(FileEntity.STORE.value, store_id, image, storage)


@router.get("/storage/{entity_id}/{kind}/{filename}")
async def get_file(
    entity_id: str,
    kind: str,
    filename: str,
    storage: LocalStorageService = Depends(get_storage_service),
):
    if kind not in FILE_KINDS or not await storage.exists(entity_id, kind, filename):
        return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)

    media_type, _ = mimetypes.guess_type(filename)
    return FileResponse(
        storage.path_for(entity_id, kind, filename),
        media_type=media_type or "application/octet-stream",
    )
