import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_uuid():
    """Generate a UUID string primary key"""
    return str(uuid.uuid4())


BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")
USER_ROLES = ("admin", "barber", "client", "super_admin")


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)  # = auth service user id
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), index=True, nullable=True)
    phone = Column(String(50), index=True, nullable=True)
    avatar_url = Column(String(500), nullable=True)
    role = Column(String(20), default="client", nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    roles = relationship("UserRole", back_populates="profile", cascade="all, delete-orphan")


class UserRole(Base):
    __tablename__ = "user_roles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    role = Column(String(20), nullable=False)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=True, index=True)
    created_at = Column(DateTime, server_default=func.now())

    profile = relationship("Profile", back_populates="roles")


class Barbershop(Base):
    __tablename__ = "barbershops"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    owner_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    address = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    whatsapp = Column(String(50), nullable=True)
    instagram = Column(String(255), nullable=True)
    tiktok = Column(String(255), nullable=True)
    logo_url = Column(String(500), nullable=True)
    primary_color = Column(String(7), nullable=True)  # e.g., #RRGGBB
    opening_time = Column(String(5), default="08:00", nullable=False)
    closing_time = Column(String(5), default="19:00", nullable=False)
    opening_days = Column(JSON, default=list, nullable=True)  # ["monday", "tuesday", ...]
    custom_message = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    professionals = relationship(
        "Professional", back_populates="barbershop", cascade="all, delete-orphan"
    )
    services = relationship("Service", back_populates="barbershop", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="barbershop", cascade="all, delete-orphan")
    notification_settings = relationship(
        "NotificationSettings", back_populates="barbershop", uselist=False, cascade="all, delete-orphan"
    )


class Professional(Base):
    __tablename__ = "professionals"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=True)
    name = Column(String(255), nullable=False)
    bio = Column(Text, nullable=True)
    photo_url = Column(String(500), nullable=True)
    specialties = Column(JSON, default=list, nullable=True)
    rating = Column(Float, default=5.0, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    barbershop = relationship("Barbershop", back_populates="professionals")


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0.0)
    duration_minutes = Column(Integer, nullable=False, default=30)
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    barbershop = relationship("Barbershop", back_populates="services")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    client_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    professional_id = Column(
        String(36), ForeignKey("professionals.id"), nullable=False, index=True
    )
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    booking_date = Column(Date, nullable=False, index=True)
    booking_time = Column(String(5), nullable=False)  # HH:MM
    status = Column(String(20), default="pending", nullable=False)  # see BOOKING_STATUSES
    total_price = Column(Float, nullable=False, default=0.0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    barbershop = relationship("Barbershop", back_populates="bookings")
    client = relationship("Profile")
    professional = relationship("Professional")
    service = relationship("Service")


class ProfessionalTimeBlock(Base):
    __tablename__ = "professional_time_blocks"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    professional_id = Column(
        String(36), ForeignKey("professionals.id"), nullable=False, index=True
    )
    block_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    reason = Column(String(255), nullable=True)  # lunch, day off, ...
    created_at = Column(DateTime, server_default=func.now())


class BarbershopClient(Base):
    __tablename__ = "barbershop_clients"
    __table_args__ = (UniqueConstraint("barbershop_id", "client_id", name="uq_barbershop_client"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    client_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    first_visit = Column(DateTime, nullable=True)
    last_visit = Column(DateTime, nullable=True)
    total_visits = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    client = relationship("Profile")


class SubscriptionPlan(Base):
    __tablename__ = "subscription_plans"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0.0)
    duration_days = Column(Integer, nullable=False, default=30)
    max_services_per_month = Column(Integer, nullable=True)  # None = unlimited
    services_included = Column(JSON, default=list, nullable=True)  # service ids, empty = all
    discount_percentage = Column(Float, default=0.0, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class ClientSubscription(Base):
    __tablename__ = "client_subscriptions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    client_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    plan_id = Column(String(36), ForeignKey("subscription_plans.id"), nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    status = Column(String(20), default="active", nullable=False)  # active, expired, cancelled
    payment_status = Column(String(20), default="pending", nullable=True)
    services_used_this_month = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    plan = relationship("SubscriptionPlan")
    client = relationship("Profile")


class SubscriptionUsage(Base):
    __tablename__ = "subscription_usage"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    subscription_id = Column(
        String(36), ForeignKey("client_subscriptions.id"), nullable=False, index=True
    )
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False)
    used_at = Column(DateTime, server_default=func.now())


class ProfessionalCommission(Base):
    __tablename__ = "professional_commissions"
    __table_args__ = (
        UniqueConstraint("barbershop_id", "professional_id", name="uq_professional_commission"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    professional_id = Column(String(36), ForeignKey("professionals.id"), nullable=False)
    commission_rate = Column(Float, nullable=False, default=50.0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    professional = relationship("Professional")


class CommissionPayment(Base):
    __tablename__ = "commission_payments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    professional_id = Column(
        String(36), ForeignKey("professionals.id"), nullable=False, index=True
    )
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    total_revenue = Column(Float, nullable=False, default=0.0)
    commission_rate = Column(Float, nullable=False)
    commission_amount = Column(Float, nullable=False, default=0.0)
    bookings_count = Column(Integer, nullable=False, default=0)
    status = Column(String(20), default="pending", nullable=False)  # pending, paid
    paid_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    professional = relationship("Professional")


class NotificationSettings(Base):
    __tablename__ = "notification_settings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(
        String(36), ForeignKey("barbershops.id"), unique=True, nullable=False, index=True
    )
    enabled = Column(Boolean, default=True, nullable=False)
    send_to_client = Column(Boolean, default=True, nullable=False)
    send_whatsapp = Column(Boolean, default=False, nullable=False)
    admin_email = Column(String(255), nullable=True)
    admin_whatsapp = Column(String(50), nullable=True)
    reminder_minutes = Column(Integer, default=30, nullable=False)
    custom_message = Column(Text, nullable=True)
    n8n_webhook_url = Column(String(500), nullable=True)
    send_booking_confirmation = Column(Boolean, default=True, nullable=False)
    send_booking_reminder = Column(Boolean, default=True, nullable=False)
    # Evolution API (WhatsApp gateway) credentials
    evolution_api_url = Column(String(500), nullable=True)
    evolution_api_key = Column(String(255), nullable=True)
    evolution_instance_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    barbershop = relationship("Barbershop", back_populates="notification_settings")


class NotificationTemplate(Base):
    __tablename__ = "notification_templates"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    channel = Column(String(20), nullable=False)  # email, whatsapp
    trigger_event = Column(String(50), nullable=False)  # booking_confirmed, booking_cancelled, ...
    subject = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Notification(Base):
    """In-app notification shown in the user's feed"""

    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=True, index=True)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), default="info", nullable=False)  # info, success, error, booking
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class BookingReminderSent(Base):
    __tablename__ = "booking_reminders_sent"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    booking_id = Column(String(36), ForeignKey("bookings.id"), unique=True, nullable=False)
    sent_at = Column(DateTime, server_default=func.now())


class GalleryImage(Base):
    __tablename__ = "gallery_images"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    image_url = Column(String(1000), nullable=False)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class TutorialVideo(Base):
    __tablename__ = "tutorial_videos"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=True, index=True)
    category_id = Column(String(100), nullable=False, index=True)
    category_title = Column(String(255), nullable=False)
    category_icon = Column(String(16), default="🎬", nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    video_url = Column(String(1000), nullable=False)
    duration = Column(String(20), nullable=True)  # e.g. "5:30"
    display_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class TutorialImage(Base):
    __tablename__ = "tutorial_images"
    __table_args__ = (
        UniqueConstraint("barbershop_id", "tutorial_id", name="uq_tutorial_image"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    category_id = Column(String(100), nullable=False)
    tutorial_id = Column(String(100), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=False)  # data URL returned by the image gateway
    step_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class RegistrationCode(Base):
    __tablename__ = "registration_codes"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    code = Column(String(50), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime, nullable=True)
    is_used = Column(Boolean, default=False, nullable=False)
    used_at = Column(DateTime, nullable=True)
    used_by = Column(String(36), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class PaymentTransaction(Base):
    __tablename__ = "payment_transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    barbershop_id = Column(String(36), ForeignKey("barbershops.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    plan_id = Column(String(36), ForeignKey("subscription_plans.id"), nullable=False)
    preference_id = Column(String(255), nullable=True)
    transaction_id = Column(String(255), index=True, nullable=True)
    status = Column(String(50), default="pending", nullable=False)
    provider_status = Column(String(50), nullable=True)
    payment_method = Column(String(50), nullable=True)
    raw_response = Column(JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
