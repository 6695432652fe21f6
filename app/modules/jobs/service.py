"""
Servicios de negocio para el módulo de Órdenes de trabajo
"""
import logging
from typing import List, Optional
from uuid import UUID

from app.common.service import BaseService
from app.modules.customers.models import Customer
from app.modules.jobs.models import Job, JobStatus
from app.modules.jobs.schemas import JobCreate, JobUpdate

logger = logging.getLogger(__name__)


class JobService(BaseService):
    """Servicio principal para órdenes de trabajo"""

    model = Job
    label = "Job"

    def list_jobs(self, status: Optional[str] = None, search: Optional[str] = None) -> List[Job]:
        query = self._active_query()
        if status:
            query = query.filter(Job.status == status)
        query = self._search(query, search, [Job.title, Job.technician])
        return query.order_by(Job.created_at.desc()).all()

    def get_job(self, job_id: UUID) -> Job:
        return self._get_or_404(job_id)

    def create_job(self, job_data: JobCreate) -> Job:
        """Crear orden de trabajo; el cliente debe existir"""
        self._get_or_404(job_data.customer, Customer, "Customer")
        job = Job(
            customer_id=job_data.customer,
            vehicle=job_data.vehicle.model_dump(),
            title=job_data.title,
            description=job_data.description,
            status=job_data.status or JobStatus.PENDING.value,
            technician=job_data.technician,
            estimated_time_hours=job_data.estimated_time_hours,
            amount=job_data.amount or 0,
            services=job_data.services or [],
            notes=job_data.notes or "",
        )
        job = self._save(job)
        logger.info(f"Job created: {job.id} ({job.title})")
        return job

    def update_job(self, job_id: UUID, job_data: JobUpdate) -> Job:
        job = self.get_job(job_id)
        changes = job_data.model_dump(exclude_unset=True)

        vehicle = changes.pop("vehicle", None)
        if vehicle:
            merged = dict(job.vehicle or {})
            merged.update({k: v for k, v in vehicle.items() if v is not None})
            job.vehicle = merged

        for required in ("title", "status", "amount", "services"):
            if required in changes and changes[required] is None:
                changes.pop(required)
        if "notes" in changes and changes["notes"] is None:
            changes["notes"] = ""

        self._apply_changes(job, changes)
        return self._save(job)

    def delete_job(self, job_id: UUID) -> None:
        self._soft_delete(self.get_job(job_id))
