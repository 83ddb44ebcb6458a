from fastapi import APIRouter, Depends, File, Form, UploadFile

from lineup.config import settings
from lineup.core.dependencies import require_admin, require_producer
from lineup.core.exceptions import BadRequestError
from lineup.schemas.admin import CleanupReport, StoredFile
from lineup.services import storage_service
from lineup.services.storage_cleanup_service import run_cleanup_async

router = APIRouter(prefix="/storage", tags=["storage"])


@router.post("/upload", response_model=StoredFile, status_code=201)
async def upload(
    file: UploadFile = File(...),
    category: str = Form("documents"),
    _=Depends(require_producer),
):
    data = await file.read()
    if not data:
        raise BadRequestError("Empty file")
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise BadRequestError(f"File exceeds {settings.MAX_UPLOAD_BYTES} bytes")
    key = storage_service.generate_key(category, file.filename or "upload")
    await storage_service.upload_file(data, key, file.content_type or "application/octet-stream")
    return StoredFile(path=key, size=len(data), url=storage_service.public_url(key))


@router.get("/files", response_model=list[StoredFile])
async def list_files(prefix: str = "", _=Depends(require_producer)):
    return await storage_service.list_files(prefix)


@router.delete("/files/{key:path}", status_code=204)
async def delete_file(key: str, _=Depends(require_producer)):
    await storage_service.delete_file(key)


@router.post("/cleanup", response_model=CleanupReport)
async def cleanup(dry_run: bool = False, _=Depends(require_admin)):
    """Delete all but the newest backup in each backup directory."""
    return await run_cleanup_async(dry_run=dry_run)
