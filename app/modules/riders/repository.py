# app/modules/riders/repository.py
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from datetime import datetime

from app.shared.database.models import Rider, User
from app.shared.database.store import Collection

class RidersRepository:
    def __init__(self, db: Session):
        self.db = db
        self.riders = Collection(
            db, Rider, filter_fields=("email", "status", "work_status", "district")
        )
        self.users = Collection(db, User, filter_fields=("email", "role"))

    def create_rider(self, rider_data: Dict[str, Any], email: str) -> int:
        return self.riders.insert({
            **rider_data,
            "email": email,
            "status": "pending",
            "work_status": "available",
            "created_at": datetime.now()
        })

    def get_by_status(self, status: str) -> List[Rider]:
        return self.riders.find({"status": status})

    def get_available_in_district(self, district: str) -> List[Rider]:
        return self.riders.find({
            "status": "active",
            "work_status": "available",
            "district": district
        })

    def set_status(self, rider_id: int, status: str) -> int:
        return self.riders.update({"id": rider_id}, {"status": status})

    def set_work_status(self, rider_id: int, work_status: str) -> int:
        return self.riders.update({"id": rider_id}, {"work_status": work_status})

    def claim_for_delivery(self, rider_id: int) -> int:
        """Solo repartidores activos y libres pasan a 'in_delivery'"""
        return self.riders.update(
            {"id": rider_id, "status": "active", "work_status": "available"},
            {"work_status": "in_delivery"}
        )

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.users.find_one({"email": email})

    def promote_user_to_rider(self, user_id: int) -> int:
        return self.users.update({"id": user_id}, {"role": "rider"})
