# app/modules/parcels/repository.py
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from datetime import datetime
from uuid import uuid4

from app.shared.database.models import Parcel, Payment
from app.shared.database.store import Collection

def generate_tracking_id(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"ZS-{now:%Y%m%d}-{uuid4().hex[:8].upper()}"

class ParcelsRepository:
    def __init__(self, db: Session):
        self.db = db
        self.parcels = Collection(
            db, Parcel,
            filter_fields=("created_by", "payment_status", "delivery_status", "assigned_rider_email", "tracking_id")
        )
        self.payments = Collection(db, Payment, filter_fields=("email", "parcel_id", "transaction_id"), sort_field="paid_at")

    def create_parcel(self, parcel_data: Dict[str, Any], created_by: str) -> Parcel:
        now = datetime.now()
        parcel_id = self.parcels.insert({
            **parcel_data,
            "tracking_id": generate_tracking_id(now),
            "created_by": created_by,
            "payment_status": "unpaid",
            "delivery_status": "pending",
            "created_at": now
        })
        return self.parcels.find_by_id(parcel_id)

    def list_parcels(
        self,
        created_by: Optional[str] = None,
        payment_status: Optional[str] = None,
        delivery_status: Optional[str] = None
    ) -> List[Parcel]:
        return self.parcels.find({
            "created_by": created_by,
            "payment_status": payment_status,
            "delivery_status": delivery_status
        })

    def list_rider_parcels(self, rider_email: str, delivery_status: Optional[str] = None) -> List[Parcel]:
        return self.parcels.find({
            "assigned_rider_email": rider_email,
            "delivery_status": delivery_status
        })

    def mark_in_transit(self, parcel_id: int, rider_id: int, rider_name: str, rider_email: str) -> int:
        """Solo transiciona envíos en 'pending'"""
        return self.parcels.update(
            {"id": parcel_id, "delivery_status": "pending"},
            {
                "delivery_status": "in_transit",
                "assigned_rider_id": rider_id,
                "assigned_rider_name": rider_name,
                "assigned_rider_email": rider_email,
                "assigned_at": datetime.now()
            }
        )

    def mark_delivered(self, parcel_id: int) -> int:
        return self.parcels.update(
            {"id": parcel_id, "delivery_status": "in_transit"},
            {"delivery_status": "delivered", "delivered_at": datetime.now()}
        )

    def mark_paid(self, parcel_id: int) -> int:
        """Guarda explícita: solo envíos 'unpaid'"""
        return self.parcels.update(
            {"id": parcel_id, "payment_status": "unpaid"},
            {"payment_status": "paid"}
        )

    def delete_parcel(self, parcel_id: int) -> int:
        return self.parcels.delete({"id": parcel_id})

    # Ledger
    def get_payment_by_transaction(self, transaction_id: str) -> Optional[Payment]:
        return self.payments.find_one({"transaction_id": transaction_id})

    def insert_payment(self, payment_data: Dict[str, Any]) -> int:
        return self.payments.insert({**payment_data, "paid_at": datetime.now()})
