# app/modules/tracking/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from app.shared.database.models import TrackingLog
from app.shared.database.store import Collection

class TrackingRepository:
    def __init__(self, db: Session):
        self.db = db
        self.logs = Collection(db, TrackingLog, filter_fields=("tracking_id", "parcel_id"), sort_field="time")

    def append(
        self,
        tracking_id: str,
        parcel_id: Optional[int],
        status: str,
        message: Optional[str],
        updated_by: Optional[str]
    ) -> int:
        """Insertar evento; no confirma la transacción"""
        return self.logs.insert({
            "tracking_id": tracking_id,
            "parcel_id": parcel_id,
            "status": status,
            "message": message,
            "updated_by": updated_by,
            "time": datetime.now()
        })

    def get_history(self, tracking_id: str) -> List[TrackingLog]:
        return self.logs.find({"tracking_id": tracking_id}, descending=False)
