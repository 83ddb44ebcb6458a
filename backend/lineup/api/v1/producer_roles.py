from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lineup.core.dependencies import get_db, require_producer
from lineup.core.exceptions import ConflictError, NotFoundError
from lineup.models.producer_role import ProducerRole
from lineup.schemas.staff import ProducerRoleBase, ProducerRoleInDB, ProducerRolesEnsure, ProducerRoleUpdate
from lineup.services import assignment_service

router = APIRouter(prefix="/producer-roles", tags=["producer-roles"])


@router.get("", response_model=list[ProducerRoleInDB])
async def list_roles(db: AsyncSession = Depends(get_db)):
    return await assignment_service.list_roles(db)


@router.post("", response_model=ProducerRoleInDB, status_code=201)
async def create_role(
    data: ProducerRoleBase,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    existing = await db.execute(select(ProducerRole).where(ProducerRole.name == data.name))
    if existing.scalar_one_or_none():
        raise ConflictError("Role already exists")
    role = ProducerRole(**data.model_dump())
    db.add(role)
    await db.commit()
    await db.refresh(role)
    return role


@router.put("/{role_id}", response_model=ProducerRoleInDB)
async def update_role(
    role_id: UUID,
    data: ProducerRoleUpdate,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    role = await db.get(ProducerRole, role_id)
    if not role:
        raise NotFoundError("Role not found")
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(role, key, value)
    await db.commit()
    await db.refresh(role)
    return role


@router.post("/ensure", response_model=list[ProducerRoleInDB])
async def ensure_roles(
    data: ProducerRolesEnsure,
    db: AsyncSession = Depends(get_db),
    _=Depends(require_producer),
):
    return await assignment_service.ensure_roles(db, [r.model_dump() for r in data.roles])
