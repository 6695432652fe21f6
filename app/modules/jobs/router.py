"""
Router para el módulo de Órdenes de trabajo

Cada alta, cambio o baja se difunde por el canal en tiempo real como `jobUpdated`.
"""
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.common.permissions import Actor
from app.common.schemas import ApiResponse, ok
from app.dependencies.channels import realtime_dependency
from app.dependencies.dbDependecies import db_dependency
from app.modules.auth.dependencies import get_actor
from app.modules.jobs.models import JobStatus
from app.modules.jobs.schemas import JobCreate, JobOut, JobUpdate
from app.modules.jobs.service import JobService

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def _payload(job) -> dict:
    return JobOut.model_validate(job).model_dump(by_alias=True, mode="json")


@router.get("", response_model=ApiResponse[List[JobOut]])
async def get_jobs(
    db: db_dependency,
    status: Optional[JobStatus] = Query(None, description="Filtrar por estado"),
    search: Optional[str] = Query(None, description="Búsqueda por título o técnico"),
    actor: Actor = Depends(get_actor),
):
    """Listar órdenes de trabajo, más recientes primero"""
    return ok(JobService(db).list_jobs(status.value if status else None, search))


@router.get("/{job_id}", response_model=ApiResponse[JobOut])
async def get_job(job_id: UUID, db: db_dependency, actor: Actor = Depends(get_actor)):
    return ok(JobService(db).get_job(job_id))


@router.post("", response_model=ApiResponse[JobOut], status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreate,
    db: db_dependency,
    realtime: realtime_dependency,
    actor: Actor = Depends(get_actor),
):
    """
    Crear orden de trabajo

    - **customer**: ID del cliente (debe existir)
    - **vehicle**: {make, model, year, plateNo}; make y model requeridos
    - **title**: requerido
    """
    job = JobService(db).create_job(job_data)
    await realtime.broadcast("jobUpdated", {"type": "created", "job": _payload(job)})
    return ok(job, message="Job created successfully")


@router.put("/{job_id}", response_model=ApiResponse[JobOut])
async def update_job(
    job_id: UUID,
    job_data: JobUpdate,
    db: db_dependency,
    realtime: realtime_dependency,
    actor: Actor = Depends(get_actor),
):
    job = JobService(db).update_job(job_id, job_data)
    await realtime.broadcast("jobUpdated", {"type": "updated", "job": _payload(job)})
    return ok(job, message="Job updated successfully")


@router.delete("/{job_id}", response_model=ApiResponse[None])
async def delete_job(
    job_id: UUID,
    db: db_dependency,
    realtime: realtime_dependency,
    actor: Actor = Depends(get_actor),
):
    JobService(db).delete_job(job_id)
    await realtime.broadcast("jobUpdated", {"type": "deleted", "jobId": str(job_id)})
    return ok(message="Job deleted successfully")
