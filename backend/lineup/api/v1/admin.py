"""
Admin utilities: feed publishing over FTP, email checks and the
allow-listed maintenance operations.
"""
import ftplib
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_admin
from lineup.core.exceptions import BadRequestError
from lineup.schemas.admin import (
    EmailTestRequest,
    EmailTestResponse,
    FtpSettings,
    FtpTestResponse,
    FtpUploadRequest,
    MaintenanceRequest,
    MaintenanceResult,
)
from lineup.services import email_service, ftp_service, maintenance_service
from lineup.services.feed_service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/ftp/test", response_model=FtpTestResponse)
async def ftp_test(data: FtpSettings, _=Depends(require_admin)):
    return await ftp_service.test_connection(data.host, data.port, data.username, data.password, data.path)


@router.post("/ftp/upload-feed", response_model=FtpTestResponse)
async def ftp_upload_feed(
    data: FtpUploadRequest,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_admin),
):
    content = await FeedService(db).stored_or_generate(data.format)
    filename = data.filename or f"schedule.{data.format}"
    if "/" in filename:
        raise BadRequestError("filename must not contain a path")
    try:
        await ftp_service.upload(
            data.host, data.port, data.username, data.password, data.path, filename, content.encode("utf-8")
        )
    except ftplib.all_errors as e:
        logger.error("FTP upload to %s failed: %s", data.host, e)
        return FtpTestResponse(success=False, message=f"Upload failed: {e}")
    return FtpTestResponse(success=True, message=f"Uploaded {filename} to {data.host}", entries=[filename])


@router.post("/email/test", response_model=EmailTestResponse)
async def email_test(data: EmailTestRequest, _=Depends(require_admin)):
    sent = await email_service.send_test_email(data.to, data.subject)
    if sent:
        return EmailTestResponse(success=True, message=f"Test email sent to {data.to}")
    return EmailTestResponse(success=False, message="Email not sent (provider not configured or send failed)")


@router.get("/maintenance/operations", response_model=list[str])
async def list_operations(_=Depends(require_admin)):
    return sorted(maintenance_service.OPERATIONS)


@router.post("/maintenance", response_model=MaintenanceResult)
async def run_maintenance(
    data: MaintenanceRequest,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_admin),
):
    return await maintenance_service.run_operation(db, data.operation, data.params)
