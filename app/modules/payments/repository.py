# app/modules/payments/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional

from app.shared.database.models import Payment
from app.shared.database.store import Collection

class PaymentsRepository:
    def __init__(self, db: Session):
        self.db = db
        self.payments = Collection(db, Payment, filter_fields=("email", "parcel_id", "transaction_id"), sort_field="paid_at")

    def list_payments(self, email: Optional[str] = None) -> List[Payment]:
        return self.payments.find({"email": email})
