from app.enums import DonationStatus


class ValidationError(ValueError):
    pass


class NotFoundError(LookupError):
    pass


class ProcessorError(RuntimeError):
    pass


def require(condition: bool, message: str) -> None:
    if not condition:
        raise ValidationError(message)


def validate_quantity(quantity: int) -> None:
    require(quantity >= 1, "quantity must be >= 1")


def validate_amount_minor_units(amount: int) -> None:
    require(amount > 0, "amount must be greater than zero")


def parse_donation_status(value: str) -> DonationStatus:
    try:
        return DonationStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unsupported donation status: {value}") from exc
