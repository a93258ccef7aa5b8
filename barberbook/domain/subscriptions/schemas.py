"""Subscription domain schemas - Pydantic models for plans and client subscriptions"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PlanCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(ge=0)
    duration_days: int = Field(default=30, gt=0)
    max_services_per_month: Optional[int] = Field(default=None, gt=0)
    services_included: list[str] = Field(default_factory=list)
    discount_percentage: float = Field(default=0, ge=0, le=100)
    is_active: bool = True


class PlanUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    duration_days: Optional[int] = Field(default=None, gt=0)
    max_services_per_month: Optional[int] = Field(default=None, gt=0)
    services_included: Optional[list[str]] = None
    discount_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    is_active: Optional[bool] = None


class PlanResponse(BaseModel):
    id: str
    barbershop_id: str
    name: str
    description: Optional[str] = None
    price: float
    duration_days: int
    max_services_per_month: Optional[int] = None
    services_included: Optional[list[str]] = None
    discount_percentage: Optional[float] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubscribeRequest(BaseModel):
    client_id: str
    plan_id: str
    start_date: Optional[datetime] = None
    payment_status: str = "paid"


class ClientSubscriptionResponse(BaseModel):
    id: str
    barbershop_id: str
    client_id: str
    client_name: Optional[str] = None
    plan_id: str
    plan_name: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: str
    payment_status: Optional[str] = None
    services_used_this_month: int


class SubscriptionCheckResponse(BaseModel):
    has_subscription: bool
    can_use: bool
    services_remaining: Optional[int] = None  # None = unlimited
    subscription_id: Optional[str] = None


class TrialStatusResponse(BaseModel):
    is_in_trial: bool
    trial_expired: bool
    days_remaining: int
    trial_end_date: Optional[datetime] = None
    has_active_subscription: bool


class ExpireResponse(BaseModel):
    expired: int
