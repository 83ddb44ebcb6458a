from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_admin, require_producer
from lineup.core.exceptions import BadRequestError
from lineup.models.user import UserRole
from lineup.schemas.auth import UserResponse
from lineup.schemas.staff import WorkerAccountCreate, WorkerCreate, WorkerInDB, WorkerUpdate
from lineup.services import worker_service
from lineup.services.auth_service import create_worker_account

router = APIRouter(prefix="/workers", tags=["workers"])


@router.get("", response_model=list[WorkerInDB])
async def list_workers(department: str | None = None, db: AsyncSession = Depends(get_db)):
    return await worker_service.list_workers(db, department)


@router.get("/{worker_id}", response_model=WorkerInDB)
async def get_worker(worker_id: UUID, db: AsyncSession = Depends(get_db)):
    return await worker_service.get_worker(db, worker_id)


@router.post("", response_model=WorkerInDB, status_code=201)
async def create_worker(
    data: WorkerCreate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await worker_service.create_worker(db, data.model_dump())


@router.put("/{worker_id}", response_model=WorkerInDB)
async def update_worker(
    worker_id: UUID,
    data: WorkerUpdate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await worker_service.update_worker(db, worker_id, data.model_dump(exclude_unset=True))


@router.delete("/{worker_id}", status_code=204)
async def delete_worker(
    worker_id: UUID,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_admin),
):
    await worker_service.delete_worker(db, worker_id)


@router.post("/{worker_id}/account", response_model=UserResponse, status_code=201)
async def create_account(
    worker_id: UUID,
    data: WorkerAccountCreate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_admin),
):
    """Create a login for a worker, using the worker's email."""
    worker = await worker_service.get_worker(db, worker_id)
    if not worker.email:
        raise BadRequestError("Worker has no email address")
    try:
        role = UserRole(data.role)
    except ValueError:
        raise BadRequestError(f"Unknown role: {data.role}")
    return await create_worker_account(db, worker, data.password, role)
