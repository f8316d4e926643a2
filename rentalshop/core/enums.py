"""Enums for the rental-shop contract engine.

Values match the REST API wire format (upper snake case).
"""

from enum import Enum


class ContractStatus(str, Enum):
    """Lifecycle status of a rental contract."""

    ACTIVE = "ACTIVE"
    CANCELED = "CANCELED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class PaymentMethod(str, Enum):
    PIX = "PIX"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    CASH = "CASH"


class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


class ProductStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    RENTED = "RENTED"
    MAINTENANCE = "MAINTENANCE"
    DISABLED = "DISABLED"


class WizardStep(int, Enum):
    """Ordered steps of the contract wizard."""

    BASIC_INFO = 0
    ITEMS = 1
    PAYMENTS = 2
    REVIEW = 3


class SessionState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    CLOSED = "closed"


CONTRACT_STATUS_LABELS = {
    ContractStatus.ACTIVE: "Active",
    ContractStatus.CANCELED: "Canceled",
    ContractStatus.IN_PROGRESS: "In progress",
    ContractStatus.COMPLETED: "Completed",
}

PAYMENT_METHOD_LABELS = {
    PaymentMethod.PIX: "PIX",
    PaymentMethod.CREDIT_CARD: "Credit card",
    PaymentMethod.DEBIT_CARD: "Debit card",
    PaymentMethod.CASH: "Cash",
}
