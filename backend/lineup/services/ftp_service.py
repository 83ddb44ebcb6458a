"""
FTP helpers for publishing the schedule feed to the station website.

ftplib is blocking, so every call runs in a worker thread.
"""
import asyncio
import ftplib
import io
import logging

logger = logging.getLogger(__name__)

FTP_TIMEOUT = 15  # seconds
MAX_LISTED_ENTRIES = 5


def _connect(host: str, port: int, username: str, password: str) -> ftplib.FTP:
    ftp = ftplib.FTP()
    ftp.connect(host, port, timeout=FTP_TIMEOUT)
    try:
        ftp.login(username, password)
    except ftplib.all_errors:
        ftp.close()
        raise
    return ftp


def _test_connection(host: str, port: int, username: str, password: str, path: str) -> dict:
    try:
        ftp = _connect(host, port, username, password)
    except ftplib.all_errors as e:
        return {"success": False, "message": f"Connection failed: {e}", "entries": []}
    try:
        if path and path != "/":
            ftp.cwd(path)
        entries = ftp.nlst()[:MAX_LISTED_ENTRIES]
        return {"success": True, "message": f"Connected to {host}", "entries": entries}
    except ftplib.all_errors as e:
        return {"success": False, "message": f"Connected but listing failed: {e}", "entries": []}
    finally:
        try:
            ftp.quit()
        except ftplib.all_errors:
            ftp.close()


def _upload(host: str, port: int, username: str, password: str, path: str, filename: str, content: bytes) -> None:
    ftp = _connect(host, port, username, password)
    try:
        if path and path != "/":
            ftp.cwd(path)
        ftp.storbinary(f"STOR {filename}", io.BytesIO(content))
    finally:
        try:
            ftp.quit()
        except ftplib.all_errors:
            ftp.close()


async def test_connection(host: str, port: int = 21, username: str = "anonymous", password: str = "", path: str = "/") -> dict:
    result = await asyncio.to_thread(_test_connection, host, port, username, password, path)
    if result["success"]:
        logger.info("FTP test to %s succeeded", host)
    else:
        logger.warning("FTP test to %s failed: %s", host, result["message"])
    return result


async def upload(
    host: str, port: int, username: str, password: str, path: str, filename: str, content: bytes
) -> None:
    """Upload bytes; ftplib errors propagate to the caller."""
    await asyncio.to_thread(_upload, host, port, username, password, path, filename, content)
    logger.info("Uploaded %s (%d bytes) to %s%s", filename, len(content), host, path)
