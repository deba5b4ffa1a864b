# pubstock/errors.py


class RemoteOperationFailed(Exception):
    """Any failure reported by the products collection (network, validation, permission)."""

    def __init__(self, action: str, cause=None):
        self.action = action
        self.cause = cause
        message = f"{action} failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class NothingToRestock(Exception):
    """Raised when an order is requested but no visible product is low on stock."""

    def __init__(self):
        super().__init__("No products need restocking!")
