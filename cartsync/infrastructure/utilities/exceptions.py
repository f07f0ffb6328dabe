"""
Custom exceptions for the cart engine
"""

from typing import Optional


class CartEngineError(Exception):
    """Base exception for the cart engine"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.user_message = user_message or "An error occurred. Please try again."
        self.error_code = error_code or "GENERAL_ERROR"


class NoOwnerError(CartEngineError):
    """A mutation was attempted without a resolved identity"""

    def __init__(self, operation: str = "cart operation"):
        super().__init__(
            f"No owner resolved for {operation}",
            "Please log in to use your cart.",
            "NO_OWNER",
        )
        self.operation = operation


class NotFoundError(CartEngineError):
    """A cart or product id is absent from every relevant source"""

    def __init__(self, kind: str, identifier: int):
        super().__init__(
            f"{kind} not found: {identifier}",
            f"{kind} {identifier} was not found.",
            "NOT_FOUND",
        )
        self.kind = kind
        self.identifier = identifier


class GatewayUnavailableError(CartEngineError):
    """The remote cart service failed or timed out"""

    def __init__(self, message: str, operation: str = None, status_code: Optional[int] = None):
        super().__init__(
            message,
            "The cart service is unavailable right now. Please try again in a moment.",
            "GATEWAY_UNAVAILABLE",
        )
        self.operation = operation
        self.status_code = status_code


class StoreUnavailableError(CartEngineError):
    """The durable cart store failed"""

    def __init__(self, message: str, operation: str = None):
        super().__init__(
            message,
            "Sorry, your cart could not be saved. Please try again.",
            "STORE_UNAVAILABLE",
        )
        self.operation = operation


class UnsupportedOperationError(CartEngineError):
    """The read-only remote backend rejected a write or delete"""

    def __init__(self, operation: str, cart_id: Optional[int] = None):
        target = f" for cart {cart_id}" if cart_id is not None else ""
        super().__init__(
            f"Remote service does not support {operation}{target}",
            f"Cannot {operation} remote cart{target}: the remote service is read-only.",
            "UNSUPPORTED_OPERATION",
        )
        self.operation = operation
        self.cart_id = cart_id


class ValidationError(CartEngineError):
    """Input validation errors"""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message, message, "VALIDATION_ERROR"  # Validation errors are user-friendly
        )
        self.field = field


class InvalidQuantityError(ValidationError):
    """Quantity below the allowed minimum"""

    def __init__(self, quantity: int):
        super().__init__(f"Quantity must be a whole number of at least 1, got {quantity}", "quantity")
        self.quantity = quantity
