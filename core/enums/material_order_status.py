"""Material order status enumeration."""

from enum import Enum


class MaterialOrderStatus(str, Enum):
    """Lifecycle of a material order placed by a foreman."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    PICKING = "Picking"
    IN_TRANSIT = "In Transit"
    DELIVERED = "Delivered"
    PARTIALLY_DELIVERED = "Partially Delivered"
