# app/modules/riders/service.py
from typing import List
from sqlalchemy.orm import Session
import logging

from .repository import RidersRepository
from .schemas import RiderCreateRequest, RiderResponse
from app.core.errors import InvalidArgument
from app.shared.database.models import RIDER_STATUSES
from app.shared.database.store import commit, parse_object_id

logger = logging.getLogger(__name__)


class RidersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = RidersRepository(db)

    async def register(self, rider_data: RiderCreateRequest, email: str) -> int:
        """Registro del repartidor; queda 'pending' hasta que un admin lo apruebe"""
        rider_id = self.repository.create_rider(rider_data.model_dump(), email)
        commit(self.db)
        logger.info(f"Rider application from {email} ({rider_data.district})")
        return rider_id

    async def list_pending(self) -> List[RiderResponse]:
        return [RiderResponse.model_validate(r) for r in self.repository.get_by_status("pending")]

    async def list_active(self) -> List[RiderResponse]:
        return [RiderResponse.model_validate(r) for r in self.repository.get_by_status("active")]

    async def list_available(self, district: str) -> List[RiderResponse]:
        if not district or not district.strip():
            raise InvalidArgument("District is required")
        riders = self.repository.get_available_in_district(district.strip())
        return [RiderResponse.model_validate(r) for r in riders]

    async def update_status(self, rider_id: str, status: str) -> int:
        """
        Cambiar el estado del repartidor

        Aprobar (status='active') también cambia el rol del usuario a 'rider'.
        Si no existe el usuario, la actualización del repartidor sigue adelante;
        un admin conserva su rol.
        """
        if status not in RIDER_STATUSES:
            raise InvalidArgument(f"Invalid rider status '{status}'. Allowed: {list(RIDER_STATUSES)}")

        rider = self.repository.riders.find_by_id(parse_object_id(rider_id, "rider_id"))
        modified = self.repository.set_status(rider.id, status)

        if status == "active":
            user = self.repository.get_user_by_email(rider.email)
            if user is None:
                logger.warning(f"Rider {rider.id} approved but no user found for {rider.email}")
            elif user.role == "admin":
                logger.info(f"Rider {rider.id} approved; {rider.email} keeps the admin role")
            else:
                self.repository.promote_user_to_rider(user.id)

        commit(self.db)
        logger.info(f"Rider {rider.id} status -> {status}")
        return modified
