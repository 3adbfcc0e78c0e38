# app/modules/parcels/service.py
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from .repository import ParcelsRepository
from .schemas import ParcelCreateRequest, ParcelResponse, PaymentResponse
from app.core.errors import AlreadyPaid, Forbidden, InvalidTransition, NotFound, ZapShiftError
from app.modules.riders.repository import RidersRepository
from app.modules.tracking.repository import TrackingRepository
from app.shared.database.models import Parcel, User
from app.shared.database.store import commit, parse_object_id

logger = logging.getLogger(__name__)


class ParcelLifecycle:
    """
    Transiciones de estado del envío y sus efectos en riders, payments y
    tracking_logs.

    Cada operación de varios pasos (asignar, entregar, liquidar) se confirma
    en una sola transacción: o se aplican todas las escrituras o ninguna.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = ParcelsRepository(db)
        self.riders = RidersRepository(db)
        self.tracking = TrackingRepository(db)

    def _get_parcel(self, parcel_id) -> Parcel:
        return self.repository.parcels.find_by_id(parse_object_id(parcel_id, "parcel_id"))

    def _abort(self):
        self.db.rollback()

    # ---------------- Consultas ----------------

    async def list_parcels(
        self,
        email: Optional[str] = None,
        payment_status: Optional[str] = None,
        delivery_status: Optional[str] = None
    ) -> List[ParcelResponse]:
        """Envíos filtrados, más recientes primero"""
        parcels = self.repository.list_parcels(email, payment_status, delivery_status)
        return [ParcelResponse.model_validate(p) for p in parcels]

    async def list_rider_parcels(self, rider_email: str, delivery_status: Optional[str] = None) -> List[ParcelResponse]:
        parcels = self.repository.list_rider_parcels(rider_email, delivery_status)
        return [ParcelResponse.model_validate(p) for p in parcels]

    async def get_parcel(self, parcel_id: str) -> ParcelResponse:
        return ParcelResponse.model_validate(self._get_parcel(parcel_id))

    # ---------------- Transiciones ----------------

    async def create(self, parcel_data: ParcelCreateRequest, created_by: str) -> ParcelResponse:
        """Alta del envío: pending / unpaid"""
        try:
            parcel = self.repository.create_parcel(parcel_data.model_dump(), created_by)
            self.tracking.append(
                tracking_id=parcel.tracking_id,
                parcel_id=parcel.id,
                status="parcel_created",
                message=f"Parcel '{parcel.title}' created",
                updated_by=created_by
            )
        except ZapShiftError:
            self._abort()
            raise
        commit(self.db)
        logger.info(f"Parcel {parcel.id} ({parcel.tracking_id}) created by {created_by}")
        return ParcelResponse.model_validate(parcel)

    async def assign(self, parcel_id: str, rider_id: str, rider_name: str, assigned_by: str) -> int:
        """
        Asignar repartidor: parcel -> in_transit, rider -> in_delivery

        El envío debe estar 'pending' y el repartidor activo y disponible.
        """
        parcel = self._get_parcel(parcel_id)
        rider = self.riders.riders.find_by_id(parse_object_id(rider_id, "rider_id"))

        if parcel.delivery_status != "pending":
            raise InvalidTransition(
                f"Parcel {parcel.id} is '{parcel.delivery_status}', only pending parcels can be assigned"
            )
        if rider.status != "active" or rider.work_status != "available":
            raise InvalidTransition(
                f"Rider {rider.id} is not available (status={rider.status}, work_status={rider.work_status})"
            )

        try:
            modified = self.repository.mark_in_transit(parcel.id, rider.id, rider_name, rider.email)
            if modified == 0:
                raise InvalidTransition(f"Parcel {parcel.id} was assigned concurrently")
            if self.riders.claim_for_delivery(rider.id) == 0:
                raise InvalidTransition(f"Rider {rider.id} was assigned concurrently")
            self.tracking.append(
                tracking_id=parcel.tracking_id,
                parcel_id=parcel.id,
                status="rider_assigned",
                message=f"Assigned to rider {rider_name}",
                updated_by=assigned_by
            )
        except ZapShiftError:
            self._abort()
            raise
        commit(self.db)
        logger.info(f"Parcel {parcel.id} assigned to rider {rider.id}")
        return modified

    async def deliver(self, parcel_id: str, current_user: User) -> int:
        """Confirmar entrega: parcel -> delivered, rider -> available"""
        parcel = self._get_parcel(parcel_id)

        if parcel.delivery_status != "in_transit":
            raise InvalidTransition(
                f"Parcel {parcel.id} is '{parcel.delivery_status}', only in-transit parcels can be delivered"
            )
        if current_user.role != "admin" and parcel.assigned_rider_email != current_user.email:
            raise Forbidden(f"Parcel {parcel.id} is not assigned to {current_user.email}")

        try:
            modified = self.repository.mark_delivered(parcel.id)
            if modified == 0:
                raise InvalidTransition(f"Parcel {parcel.id} was updated concurrently")
            if parcel.assigned_rider_id is not None:
                self.riders.set_work_status(parcel.assigned_rider_id, "available")
            self.tracking.append(
                tracking_id=parcel.tracking_id,
                parcel_id=parcel.id,
                status="delivered",
                message="Parcel delivered",
                updated_by=current_user.email
            )
        except ZapShiftError:
            self._abort()
            raise
        commit(self.db)
        logger.info(f"Parcel {parcel.id} delivered")
        return modified

    async def settle(
        self,
        parcel_id: str,
        amount: Decimal,
        payment_method_id: Optional[str],
        transaction_id: str,
        email: str
    ) -> PaymentResponse:
        """
        Liquidación: parcel -> paid y registro en el ledger

        Un reintento con el mismo transaction_id devuelve el pago existente.
        """
        parcel = self._get_parcel(parcel_id)

        existing = self.repository.get_payment_by_transaction(transaction_id)
        if existing is not None:
            if existing.parcel_id != parcel.id:
                raise AlreadyPaid(f"Transaction {transaction_id} already settled another parcel")
            return PaymentResponse.model_validate(existing)

        if parcel.payment_status == "paid":
            raise AlreadyPaid(f"Parcel {parcel.id} is already paid")

        try:
            if self.repository.mark_paid(parcel.id) == 0:
                raise AlreadyPaid(f"Parcel {parcel.id} is already paid")
            payment_id = self.repository.insert_payment({
                "parcel_id": parcel.id,
                "amount": amount,
                "payment_method_id": payment_method_id,
                "email": email,
                "transaction_id": transaction_id
            })
            self.tracking.append(
                tracking_id=parcel.tracking_id,
                parcel_id=parcel.id,
                status="payment_settled",
                message=f"Payment {transaction_id} recorded",
                updated_by=email
            )
        except ZapShiftError:
            self._abort()
            raise
        commit(self.db)
        logger.info(f"Parcel {parcel.id} settled with transaction {transaction_id}")
        return PaymentResponse.model_validate(self.repository.payments.find_by_id(payment_id))

    async def delete(self, parcel_id: str) -> int:
        """
        Eliminar el envío; pagos y tracking que lo referencian se conservan

        Si estaba en tránsito, su repartidor vuelve a quedar disponible.
        """
        parcel = self._get_parcel(parcel_id)
        object_id = parcel.id
        rider_id = parcel.assigned_rider_id if parcel.delivery_status == "in_transit" else None

        try:
            deleted = self.repository.delete_parcel(object_id)
            if deleted == 0:
                raise NotFound(f"Parcel {object_id} not found")
            if rider_id is not None:
                self.riders.set_work_status(rider_id, "available")
        except ZapShiftError:
            self._abort()
            raise
        commit(self.db)
        logger.info(f"Parcel {object_id} deleted")
        return deleted
