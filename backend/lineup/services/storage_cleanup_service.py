"""
Backup cleanup: keeps only the newest database backup in each backup
directory and reports how much space was freed.

Runs are serialised with a lock file; a second run while one is active is
refused instead of queued.
"""
import asyncio
import fnmatch
import logging
import os
from contextlib import contextmanager
from pathlib import Path

from lineup.config import settings

logger = logging.getLogger(__name__)


class CleanupAlreadyRunning(RuntimeError):
    pass


@contextmanager
def cleanup_lock(lock_path: str):
    try:
        fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
    except FileExistsError:
        raise CleanupAlreadyRunning(f"Cleanup already running (lock file {lock_path} exists)")
    try:
        os.write(fd, str(os.getpid()).encode())
        os.close(fd)
        yield
    finally:
        try:
            os.remove(lock_path)
        except FileNotFoundError:
            pass


def _matching_backups(directory: Path, patterns: list[str]) -> list[Path]:
    return [
        p for p in directory.iterdir()
        if p.is_file() and any(fnmatch.fnmatch(p.name, pattern) for pattern in patterns)
    ]


def cleanup_directory(directory: Path, patterns: list[str], dry_run: bool = False) -> dict:
    report = {"directory": str(directory), "kept": None, "deleted": [], "freed_bytes": 0, "errors": []}
    if not directory.is_dir():
        report["errors"].append(f"Could not access backup directory: {directory}")
        return report

    backups = sorted(_matching_backups(directory, patterns), key=lambda p: p.stat().st_mtime, reverse=True)
    if not backups:
        return report

    report["kept"] = backups[0].name
    for path in backups[1:]:
        size = path.stat().st_size
        try:
            if not dry_run:
                path.unlink()
        except OSError as e:
            report["errors"].append(f"Failed to delete {path.name}: {e}")
            continue
        report["deleted"].append(path.name)
        report["freed_bytes"] += size
    return report


def run_cleanup(
    directories: list[str] | None = None,
    patterns: list[str] | None = None,
    lock_path: str | None = None,
    dry_run: bool = False,
) -> dict:
    directories = directories if directories is not None else settings.BACKUP_DIRS
    patterns = patterns if patterns is not None else settings.BACKUP_PATTERNS
    lock_path = lock_path or settings.CLEANUP_LOCK_FILE

    try:
        with cleanup_lock(lock_path):
            reports = [cleanup_directory(Path(d), patterns, dry_run) for d in directories]
    except CleanupAlreadyRunning as e:
        logger.warning(str(e))
        return {"success": False, "directories": [], "deleted_count": 0, "freed_bytes": 0, "errors": [], "message": str(e)}

    errors = [err for r in reports for err in r.pop("errors")]
    deleted = sum(len(r["deleted"]) for r in reports)
    freed = sum(r["freed_bytes"] for r in reports)
    for err in errors:
        logger.error("Storage cleanup: %s", err)
    logger.info("Storage cleanup removed %d backups, freed %d bytes", deleted, freed)
    return {
        "success": not errors,
        "directories": reports,
        "deleted_count": deleted,
        "freed_bytes": freed,
        "errors": errors,
        "message": f"Deleted {deleted} old backups, freed {freed / (1024 * 1024):.2f} MB",
    }


async def run_cleanup_async(**kwargs) -> dict:
    return await asyncio.to_thread(run_cleanup, **kwargs)
