from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator

from app.enums import DateFilter, DonationStatus, NotificationEventType, SortDirection


class VolunteerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=40)
    interests: list[str] = Field(default_factory=list)


class _RecordUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Columns that are NOT NULL and may be changed but never cleared.
    required_fields: ClassVar[tuple[str, ...]] = ()

    @field_validator("*")
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name in cls.required_fields:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class VolunteerUpdate(_RecordUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("name", "email", "interests")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=40)
    interests: list[str] | None = None


class YardSignRequestCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=40)
    address: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class YardSignRequestUpdate(_RecordUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("name", "email", "address", "quantity")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=40)
    address: str | None = Field(default=None, min_length=1)
    quantity: int | None = Field(default=None, ge=1)


class DonationUpdate(_RecordUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("status",)

    status: DonationStatus | None = None
    payment_reference: str | None = Field(default=None, max_length=255)


class NewsletterSubscriptionCreate(BaseModel):
    email: EmailStr


class NewsletterSubscriptionUpdate(_RecordUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("email",)

    email: EmailStr | None = None


class PaymentIntentRequest(BaseModel):
    amount: float | None = None
    email: EmailStr | None = None


class PaymentIntentResponse(BaseModel):
    clientSecret: str
    donationId: int


class DonationOutcomeRequest(BaseModel):
    status: DonationStatus


class NotificationRequest(BaseModel):
    type: NotificationEventType
    data: dict[str, Any] = Field(default_factory=dict)


class NotificationResponse(BaseModel):
    success: bool = True
    message: str = "Notification logged"
    subject: str
    content: str


class DeleteResponse(BaseModel):
    success: bool = True


class ViewResponse(BaseModel):
    kind: str
    total: int
    count: int
    query: str
    search_fields: list[str]
    date_filter: DateFilter
    sort_field: str
    sort_direction: SortDirection
    selection: list[int] = Field(default_factory=list)
    items: list[dict[str, Any]]


class BulkDeleteRequest(BaseModel):
    ids: list[int] = Field(min_length=1)


class BulkDeleteResponse(BaseModel):
    kind: str
    requested: int
    attempted: int
    succeeded: int
    failed: int
    deleted_ids: list[int]
    failures: dict[int, str]
    remaining_selection: list[int]


class ExportColumn(BaseModel):
    display_name: str = Field(min_length=1)
    field_key: str = Field(min_length=1)


class ExportRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)
    export_all: bool = False
    query: str = ""
    search_fields: list[str] = Field(default_factory=list)
    date_filter: DateFilter = DateFilter.all
    sort_field: str = "created_at"
    sort_direction: SortDirection = SortDirection.desc
    columns: list[ExportColumn] | None = None


class StatsResponse(BaseModel):
    generated_at: datetime
    volunteers_total: int
    volunteers_this_week: int
    yard_sign_requests_total: int
    donations_total_dollars: float
    donations_succeeded: int
    newsletter_total: int
    newsletter_this_month: int


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime


class HealthDetailsResponse(BaseModel):
    status: str
    timestamp: datetime
    database_ok: bool
    record_counts: dict[str, int]
