from enum import Enum


class EntityKind(str, Enum):
    volunteers = "volunteers"
    yard_sign_requests = "yard-sign-requests"
    donations = "donations"
    newsletter = "newsletter"


class DonationStatus(str, Enum):
    pending = "pending"
    succeeded = "succeeded"
    failed = "failed"


class DateFilter(str, Enum):
    all = "all"
    week = "week"
    month = "month"
    quarter = "quarter"


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class NotificationEventType(str, Enum):
    volunteer = "volunteer"
    yard_sign = "yard-sign"
    donation = "donation"
    newsletter = "newsletter"
