"""
File storage for uploaded attachments (lineup documents, images).

Supabase Storage when configured, otherwise a local directory.
"""
import logging
import os
import re
import uuid
from pathlib import Path

import httpx

from lineup.config import settings
from lineup.core.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

_SAFE_SEGMENT = re.compile(r"^[A-Za-z0-9_.-]+$")


def _local_root() -> Path:
    return Path(settings.STORAGE_DIR).resolve()


def validate_key(key: str) -> str:
    """Reject keys that are empty, absolute or escape the storage root."""
    parts = key.strip("/").split("/")
    if not key or not all(part and part not in (".", "..") and _SAFE_SEGMENT.match(part) for part in parts):
        raise BadRequestError("Invalid storage path")
    return "/".join(parts)


def generate_key(category: str, filename: str) -> str:
    if not _SAFE_SEGMENT.match(category):
        raise BadRequestError("Invalid category")
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    if not ext.isalnum():
        ext = "bin"
    return f"{category}/{uuid.uuid4()}.{ext}"


def _headers(content_type: str | None = None) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {settings.SUPABASE_SERVICE_KEY}"}
    if content_type:
        headers["Content-Type"] = content_type
    return headers


def _object_url(key: str) -> str:
    return f"{settings.SUPABASE_URL}/storage/v1/object/{settings.SUPABASE_STORAGE_BUCKET}/{key}"


def public_url(key: str) -> str | None:
    if not settings.supabase_storage_enabled:
        return None
    return f"{settings.SUPABASE_URL}/storage/v1/object/public/{settings.SUPABASE_STORAGE_BUCKET}/{key}"


async def upload_file(file_data: bytes, key: str, content_type: str = "application/octet-stream") -> str:
    key = validate_key(key)
    if settings.supabase_storage_enabled:
        headers = _headers(content_type)
        headers["x-upsert"] = "true"
        async with httpx.AsyncClient(timeout=60.0) as client:
            resp = await client.put(_object_url(key), content=file_data, headers=headers)
            resp.raise_for_status()
        logger.info("Uploaded %s to Supabase Storage (%d bytes)", key, len(file_data))
    else:
        path = _local_root() / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(file_data)
        logger.info("Stored %s locally (%d bytes)", key, len(file_data))
    return key


async def list_files(prefix: str = "") -> list[dict]:
    prefix = validate_key(prefix) if prefix else ""
    if settings.supabase_storage_enabled:
        url = f"{settings.SUPABASE_URL}/storage/v1/object/list/{settings.SUPABASE_STORAGE_BUCKET}"
        body = {"prefix": prefix, "limit": 1000, "sortBy": {"column": "name", "order": "asc"}}
        async with httpx.AsyncClient(timeout=30.0) as client:
            resp = await client.post(url, json=body, headers=_headers("application/json"))
            resp.raise_for_status()
        files = []
        for entry in resp.json():
            # Folders come back without an id
            if entry.get("id") is None:
                continue
            path = f"{prefix}/{entry['name']}" if prefix else entry["name"]
            size = (entry.get("metadata") or {}).get("size")
            files.append({"path": path, "size": size, "url": public_url(path)})
        return files

    root = _local_root()
    base = root / prefix if prefix else root
    if not base.exists():
        return []
    return [
        {"path": p.relative_to(root).as_posix(), "size": p.stat().st_size, "url": None}
        for p in sorted(base.rglob("*"))
        if p.is_file()
    ]


async def delete_file(key: str) -> None:
    key = validate_key(key)
    if settings.supabase_storage_enabled:
        async with httpx.AsyncClient(timeout=30.0) as client:
            resp = await client.delete(_object_url(key), headers=_headers())
            if resp.status_code == 404:
                raise NotFoundError("File not found")
            resp.raise_for_status()
        return

    path = _local_root() / key
    if not path.is_file():
        raise NotFoundError("File not found")
    os.remove(path)
    logger.info("Deleted local file %s", key)
