import logging
from typing import List, Optional
from uuid import UUID

from app.common.service import BaseService
from app.modules.customers.models import Customer
from app.modules.jobs.models import Job
from app.modules.service_history.models import ServiceHistory
from app.modules.service_history.schemas import ServiceHistoryCreate, ServiceHistoryUpdate
from app.modules.vehicles.models import Vehicle

logger = logging.getLogger(__name__)


class ServiceHistoryService(BaseService):
    model = ServiceHistory
    label = "Service history"

    def list_records(self, vehicle_id: Optional[UUID] = None, customer_id: Optional[UUID] = None) -> List[ServiceHistory]:
        query = self._active_query()
        if vehicle_id:
            query = query.filter(ServiceHistory.vehicle_id == vehicle_id)
        if customer_id:
            query = query.filter(ServiceHistory.customer_id == customer_id)
        return query.order_by(ServiceHistory.service_date.desc()).all()

    def get_record(self, record_id: UUID) -> ServiceHistory:
        return self._get_or_404(record_id)

    def create_record(self, data: ServiceHistoryCreate) -> ServiceHistory:
        """Vehículo y cliente deben existir; el trabajo es opcional"""
        self._get_or_404(data.vehicle, Vehicle, "Vehicle")
        self._get_or_404(data.customer, Customer, "Customer")
        if data.job:
            self._get_or_404(data.job, Job, "Job")

        record = ServiceHistory(
            vehicle_id=data.vehicle,
            customer_id=data.customer,
            job_id=data.job,
            description=data.description,
            cost=data.cost,
            technician=data.technician,
            mileage=data.mileage,
            notes=data.notes,
        )
        if data.service_date:
            record.service_date = data.service_date
        record = self._save(record)
        logger.info(f"Service history {record.id} recorded for vehicle {record.vehicle_id}")
        return record

    def update_record(self, record_id: UUID, data: ServiceHistoryUpdate) -> ServiceHistory:
        record = self.get_record(record_id)
        changes = data.model_dump(exclude_unset=True)
        if "job" in changes:
            job_id = changes.pop("job")
            if job_id:
                self._get_or_404(job_id, Job, "Job")
            record.job_id = job_id
        for required in ("description", "cost", "service_date"):
            if required in changes and changes[required] is None:
                changes.pop(required)
        self._apply_changes(record, changes)
        return self._save(record)

    def delete_record(self, record_id: UUID) -> None:
        self._soft_delete(self.get_record(record_id))
