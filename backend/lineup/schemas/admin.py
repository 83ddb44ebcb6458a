"""Pydantic schemas for storage, cleanup, FTP, email and maintenance endpoints."""
from typing import Any

from pydantic import BaseModel, EmailStr, Field


class StoredFile(BaseModel):
    path: str
    size: int | None = None
    url: str | None = None


class CleanupDirectoryReport(BaseModel):
    directory: str
    kept: str | None = None
    deleted: list[str] = []
    freed_bytes: int = 0


class CleanupReport(BaseModel):
    success: bool
    directories: list[CleanupDirectoryReport] = []
    deleted_count: int = 0
    freed_bytes: int = 0
    errors: list[str] = []
    message: str = ""


class FtpSettings(BaseModel):
    host: str = Field(..., min_length=1)
    port: int = Field(21, ge=1, le=65535)
    username: str = "anonymous"
    password: str = ""
    path: str = "/"


class FtpTestResponse(BaseModel):
    success: bool
    message: str
    entries: list[str] = []


class FtpUploadRequest(FtpSettings):
    format: str = Field("xml", pattern="^(json|xml)$")
    filename: str | None = None


class EmailTestRequest(BaseModel):
    to: EmailStr
    subject: str = "Lineup test email"


class EmailTestResponse(BaseModel):
    success: bool
    message: str


class MaintenanceRequest(BaseModel):
    operation: str
    params: dict[str, Any] = {}


class MaintenanceResult(BaseModel):
    operation: str
    affected: int
    details: dict[str, Any] = {}
