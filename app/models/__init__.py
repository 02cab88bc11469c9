from app.models.core import Donation, NewsletterSubscription, Volunteer, YardSignRequest

__all__ = [
    "Donation",
    "NewsletterSubscription",
    "Volunteer",
    "YardSignRequest",
]
