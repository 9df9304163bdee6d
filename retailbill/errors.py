class BillingError(ValueError):
    """Base class for pricing, bill and pagination failures."""


class ValidationError(BillingError):
    """Invalid catalog item or line input."""


class EmptyBillError(BillingError):
    """A bill with no line referencing a catalog item."""

    def __init__(self, message: str = "bill has no items") -> None:
        super().__init__(message)


class ConfigurationError(BillingError):
    """Invalid invoice page capacities."""
