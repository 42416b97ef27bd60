from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship, validates

from .database import Base
from .shared.dates import utc_now
from .shared.soft_delete import SoftDeleteMixin
from .shared.validators import validate_email


class User(SoftDeleteMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), default="user", nullable=False)  # admin, user
    profile_picture = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    @validates("email")
    def normalize_email(self, _key, value):
        return validate_email(value)


class Client(SoftDeleteMixin, Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    emergency_number = Column(String(30), nullable=False)
    birth_date = Column(Date, nullable=False)
    total_appointments = Column(Integer, default=0, nullable=False)  # Maintained by callers
    # Linked login account; soft-deleted with the client when the cascade policy is on
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    @property
    def full_name(self) -> str:
        parts = (self.first_name, self.middle_name, self.last_name)
        return " ".join(p.strip() for p in parts if p and p.strip())


class Service(SoftDeleteMixin, Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)


class Supply(SoftDeleteMixin, Base):
    __tablename__ = "supplies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)  # On hand; not reconciled against appointment usage
    expiration_date = Column(Date, nullable=False)
    price = Column(Float, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)


class Appointment(SoftDeleteMixin, Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    # Start of the clinic-local calendar day, stored as naive UTC
    appointment_date = Column(DateTime, nullable=False, index=True)
    appointment_time = Column(String(50), nullable=False)
    status = Column(String(20), default="pending", nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    client = relationship("Client")
    # Links are written through their own repository; this side is read-only
    service_links = relationship(
        "AppointmentServiceLink",
        order_by="AppointmentServiceLink.id",
        viewonly=True,
    )


class RecurringAppointment(SoftDeleteMixin, Base):
    __tablename__ = "recurring_appointments"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    start_date = Column(DateTime, nullable=False)
    start_time = Column(String(50), nullable=False)
    interval = Column(String(20), nullable=False)  # weekly, monthly
    duration = Column(Integer, nullable=False)  # Minutes
    status = Column(String(20), default="pending", nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    client = relationship("Client")


class AppointmentServiceLink(Base):
    __tablename__ = "appointment_services"
    __table_args__ = (
        UniqueConstraint("appointment_id", "service_id", name="uq_appointment_service"),
    )

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=True)
    unit_price = Column(Float, nullable=True)  # Service price when the link was made
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    appointment = relationship("Appointment")
    service = relationship("Service")


class AppointmentSupplyLink(SoftDeleteMixin, Base):
    __tablename__ = "appointment_supplies"
    __table_args__ = (
        UniqueConstraint("appointment_id", "supply_id", name="uq_appointment_supply"),
    )

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    supply_id = Column(Integer, ForeignKey("supplies.id"), nullable=False, index=True)
    quantity_used = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    appointment = relationship("Appointment")
    supply = relationship("Supply")
