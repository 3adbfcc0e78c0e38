# app/modules/tracking/service.py
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from .repository import TrackingRepository
from .schemas import TrackingLogCreate
from app.core.errors import NotFound
from app.shared.database.models import TrackingLog
from app.shared.database.store import commit, parse_object_id

logger = logging.getLogger(__name__)


class TrackingService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = TrackingRepository(db)

    async def append(self, log_data: TrackingLogCreate, updated_by: str) -> int:
        """Registrar un evento de seguimiento"""
        parcel_id: Optional[int] = None
        if log_data.parcel_id is not None:
            parcel_id = parse_object_id(log_data.parcel_id, "parcel_id")

        log_id = self.repository.append(
            tracking_id=log_data.tracking_id,
            parcel_id=parcel_id,
            status=log_data.status,
            message=log_data.message,
            updated_by=updated_by
        )
        commit(self.db)
        logger.info(f"Tracking event '{log_data.status}' for {log_data.tracking_id} by {updated_by}")
        return log_id

    async def history(self, tracking_id: str) -> List[TrackingLog]:
        logs = self.repository.get_history(tracking_id)
        if not logs:
            raise NotFound(f"No tracking events for {tracking_id}")
        return logs
