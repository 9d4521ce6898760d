from fastapi import status


class StockError(Exception):
    """Base error; carries the message returned to the client."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StockError):
    pass


class InvalidInput(ValidationError):
    def __init__(self, message: str = "Invalid input data"):
        super().__init__(message)


class InvalidSection(ValidationError):
    def __init__(self, message: str = "Invalid section"):
        super().__init__(message)


class BusinessRuleError(StockError):
    pass


class ItemNotFound(BusinessRuleError):
    def __init__(self, message: str = "Item not found in stock"):
        super().__init__(message)


class InsufficientStock(BusinessRuleError):
    def __init__(self, message: str = "Not enough stock available"):
        super().__init__(message)


class PersistenceError(StockError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
