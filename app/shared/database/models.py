# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, DateTime, Numeric, Text, func
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# =====================================================
# ENUMERACIONES (valores permitidos por colección)
# =====================================================
USER_ROLES = ("user", "admin", "rider")
PARCEL_TYPES = ("document", "non-document")
PAYMENT_STATUSES = ("unpaid", "paid")
DELIVERY_STATUSES = ("pending", "in_transit", "delivered")
RIDER_STATUSES = ("pending", "active", "rejected", "deactivated")
RIDER_WORK_STATUSES = ("available", "in_delivery")


class User(Base):
    """Usuario; se crea en su primer login autenticado"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    photo_url = Column(String(500))
    role = Column(String(20), nullable=False, default="user")
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    last_log_in = Column(DateTime)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class Parcel(Base):
    """Envío creado por un usuario"""
    __tablename__ = "parcels"

    id = Column(Integer, primary_key=True, index=True)
    tracking_id = Column(String(40), unique=True, nullable=False, index=True)
    created_by = Column(String(255), nullable=False, index=True)

    # Contenido
    parcel_type = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    weight = Column(Numeric(10, 2))
    cost = Column(Numeric(10, 2), nullable=False)

    # Remitente
    sender_name = Column(String(255), nullable=False)
    sender_region = Column(String(100))
    sender_district = Column(String(100), nullable=False)
    sender_address = Column(Text)

    # Destinatario
    receiver_name = Column(String(255), nullable=False)
    receiver_region = Column(String(100))
    receiver_district = Column(String(100), nullable=False)
    receiver_address = Column(Text)

    # Estados
    payment_status = Column(String(20), nullable=False, default="unpaid", index=True)
    delivery_status = Column(String(20), nullable=False, default="pending", index=True)

    # Asignación
    assigned_rider_id = Column(Integer)
    assigned_rider_name = Column(String(255))
    assigned_rider_email = Column(String(255), index=True)
    assigned_at = Column(DateTime)
    delivered_at = Column(DateTime)

    created_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<Parcel(id={self.id}, tracking_id='{self.tracking_id}', delivery_status='{self.delivery_status}')>"


class Rider(Base):
    """Repartidor registrado por sí mismo, aprobado por un admin"""
    __tablename__ = "riders"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50))
    region = Column(String(100))
    district = Column(String(100), nullable=False, index=True)
    bike_brand = Column(String(100))
    bike_registration = Column(String(100))
    status = Column(String(20), nullable=False, default="pending", index=True)
    work_status = Column(String(20), nullable=False, default="available")
    created_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<Rider(id={self.id}, email='{self.email}', status='{self.status}')>"


class Payment(Base):
    """Registro de liquidación; parcel_id es referencia, no FK"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    parcel_id = Column(Integer, nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method_id = Column(String(255))
    email = Column(String(255), nullable=False, index=True)
    transaction_id = Column(String(255), unique=True, nullable=False)
    paid_at = Column(DateTime, nullable=False)


class TrackingLog(Base):
    """Evento de seguimiento; solo inserción"""
    __tablename__ = "tracking_logs"

    id = Column(Integer, primary_key=True, index=True)
    tracking_id = Column(String(40), nullable=False, index=True)
    parcel_id = Column(Integer, nullable=True, index=True)
    status = Column(String(50), nullable=False)
    message = Column(Text)
    updated_by = Column(String(255))
    time = Column(DateTime, nullable=False)
