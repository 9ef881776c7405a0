from sqlalchemy import (
    Column, String, Integer, Boolean, Text, Date, DateTime, Numeric, ForeignKey,
    CheckConstraint, UniqueConstraint, Index
)
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
from database import Base

# Datetime columns hold naive UTC values; repositories convert at the boundary.

MONEY = Numeric(18, 2)
MEASUREMENT = Numeric(10, 2)


def generate_uuid():
    return str(uuid.uuid4())


class Customer(Base):
    __tablename__ = 'customers'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_number = Column(String(32), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date)
    email = Column(String(256), nullable=False)
    phone = Column(String(32), nullable=False, default='')
    address = Column(String(256), nullable=False, default='')
    style_preference = Column(String(64), nullable=False, default='')
    fit_preference = Column(String(64), nullable=False, default='')
    fabric_preference = Column(String(64))
    status = Column(String(16), nullable=False, default='Active')
    total_spent = Column(MONEY, nullable=False, default=0)
    registration_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    created_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    enabled = Column(Boolean, nullable=False, default=True)

    measurements = relationship(
        "CustomerMeasurement",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="CustomerMeasurement.date"
    )
    notes = relationship(
        "CustomerNote",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="CustomerNote.date"
    )

    __table_args__ = (
        CheckConstraint("customer_number != ''"),
        CheckConstraint("status IN ('Active', 'VIP')", name='check_customer_status'),
        UniqueConstraint('customer_number', name='uq_customer_number'),
        Index('idx_customers_email', 'email'),
        Index('idx_customers_enabled', 'enabled'),
    )


class CustomerMeasurement(Base):
    __tablename__ = 'customer_measurements'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey('customers.id', ondelete='CASCADE'), nullable=False)
    date = Column(DateTime, nullable=False)
    chest = Column(MEASUREMENT, nullable=False)
    waist = Column(MEASUREMENT, nullable=False)
    hips = Column(MEASUREMENT, nullable=False)
    sleeve = Column(MEASUREMENT, nullable=False)

    customer = relationship("Customer", back_populates="measurements")

    __table_args__ = (
        Index('idx_measurements_customer', 'customer_id'),
    )


class CustomerNote(Base):
    __tablename__ = 'customer_notes'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey('customers.id', ondelete='CASCADE'), nullable=False)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    text = Column(Text, nullable=False)
    author = Column(String(100))

    customer = relationship("Customer", back_populates="notes")

    __table_args__ = (
        Index('idx_notes_customer', 'customer_id'),
    )


class Appointment(Base):
    """
    A booked slot for one customer.

    Status: Scheduled -> Completed | Cancelled. Overlap between a customer's
    Scheduled appointments is checked by AppointmentRepository.has_conflict.
    """
    __tablename__ = 'appointments'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey('customers.id'), nullable=False)
    start_utc = Column(DateTime, nullable=False)
    end_utc = Column(DateTime, nullable=False)
    notes = Column(String(512))
    status = Column(String(16), nullable=False, default='Scheduled')
    created_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    enabled = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("end_utc > start_utc", name='check_appointment_window'),
        CheckConstraint(
            "status IN ('Scheduled', 'Completed', 'Cancelled')",
            name='check_appointment_status'
        ),
        Index('idx_appointments_customer_status_start', 'customer_id', 'status', 'start_utc'),
    )


class WorkOrder(Base):
    """
    Garment order header.

    The discount is stored as entered (it may exceed the subtotal); totals
    are always computed by the domain aggregate.
    """
    __tablename__ = 'work_orders'

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey('customers.id'), nullable=False)
    appointment_id = Column(String(36), ForeignKey('appointments.id'))
    currency = Column(String(3), nullable=False)
    status = Column(String(16), nullable=False, default='Draft')
    discount_amount = Column(MONEY)
    discount_currency = Column(String(3))
    created_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    enabled = Column(Boolean, nullable=False, default=True)

    items = relationship(
        "WorkOrderItem",
        back_populates="work_order",
        cascade="all, delete-orphan",
        order_by="WorkOrderItem.position"
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('Draft', 'InProgress', 'Completed', 'Cancelled')",
            name='check_work_order_status'
        ),
        Index('idx_work_orders_customer', 'customer_id', 'enabled'),
        Index('idx_work_orders_created', 'created_date'),
    )


class WorkOrderItem(Base):
    """
    One line of a work order.

    Lines are identified within their order by the lower-cased description,
    so saving an order updates matching rows in place.
    """
    __tablename__ = 'work_order_items'

    id = Column(Integer, primary_key=True, autoincrement=True)
    work_order_id = Column(String(36), ForeignKey('work_orders.id', ondelete='CASCADE'), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    description = Column(String(256), nullable=False)
    description_key = Column(String(256), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(MONEY, nullable=False)
    currency = Column(String(3), nullable=False)
    garment_type = Column(String(16), nullable=False, default='Other')
    chest = Column(MEASUREMENT)
    waist = Column(MEASUREMENT)
    hips = Column(MEASUREMENT)
    sleeve = Column(MEASUREMENT)
    measurement_notes = Column(String(512))

    work_order = relationship("WorkOrder", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity > 0", name='check_item_quantity'),
        UniqueConstraint('work_order_id', 'description_key', name='uq_work_order_item_description'),
    )
