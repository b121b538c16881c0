# retail_dashboard/services/errors.py
"""
Domain errors the controllers surface to the user (message box).

All of them mean "operation rejected, nothing changed".
"""


class DomainError(Exception):
    """Base for user-facing, non-fatal rejections."""
    pass


class ValidationError(DomainError):
    """Non-numeric or out-of-range input (quantity < 1, negative price, empty name...)."""
    pass


class InsufficientStock(DomainError):
    def __init__(self, product_name: str, available: int, requested: int):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}: only {available} available, "
            f"{requested} requested."
        )


class NotFound(DomainError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id!r} not found.")
