from sqlalchemy import JSON, Enum, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.enums import DonationStatus
from app.models.base import Base, CreatedAtMixin


class Volunteer(Base, CreatedAtMixin):
    __tablename__ = "volunteers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    interests: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)


class YardSignRequest(Base, CreatedAtMixin):
    __tablename__ = "yard_sign_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)


class Donation(Base, CreatedAtMixin):
    __tablename__ = "donations"
    __table_args__ = (Index("ix_donation_payment_reference", "payment_reference"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[DonationStatus] = mapped_column(Enum(DonationStatus), default=DonationStatus.pending, nullable=False)
    payment_reference: Mapped[str | None] = mapped_column(String(255), nullable=True)


class NewsletterSubscription(Base, CreatedAtMixin):
    __tablename__ = "newsletter_subscriptions"
    __table_args__ = (UniqueConstraint("email", name="uq_newsletter_subscriptions_email"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
