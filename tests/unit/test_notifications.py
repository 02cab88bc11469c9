import logging

from app.enums import NotificationEventType
from app.services.notifications import LoggingNotificationSink, NotificationEvent, compose_message, notify


class ExplodingSink:
    def send(self, event):
        raise ConnectionError("smtp down")


def test_compose_message_per_event_type():
    assert compose_message("donation", {"amount": 2500, "email": "d@x.org"}) == (
        "New Donation: $25.00",
        "Donation of $25.00 from d@x.org",
    )
    subject, content = compose_message(
        NotificationEventType.volunteer,
        {"name": "Jane", "email": "j@x.org", "interests": ["Canvassing", "Phone Banking"]},
    )
    assert subject == "New Volunteer: Jane"
    assert content.endswith("Canvassing, Phone Banking")
    assert compose_message("yard-sign", {"name": "Al", "email": "a@x.org", "quantity": 2, "address": "1 Main"})[1] == (
        "Al (a@x.org) requested 2 yard sign(s) for: 1 Main"
    )
    assert compose_message("newsletter", {"email": "n@x.org"})[0] == "New Newsletter Subscriber"


def test_notify_never_raises(caplog):
    event = NotificationEvent(event_type=NotificationEventType.newsletter, payload={"email": "n@x.org"})
    with caplog.at_level(logging.WARNING):
        assert notify(ExplodingSink(), event) is False
    assert "smtp down" in caplog.text


def test_logging_sink_writes_subject(caplog):
    event = NotificationEvent(event_type=NotificationEventType.newsletter, payload={"email": "n@x.org"})
    with caplog.at_level(logging.INFO, logger="app.services.notifications"):
        assert notify(LoggingNotificationSink(), event) is True
    assert "New Newsletter Subscriber" in caplog.text
