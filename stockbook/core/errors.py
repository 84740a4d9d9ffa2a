"""Domain error taxonomy.

Services raise these; the handlers installed by ``create_app`` render them
as ``{"success": false, "msg": ...}`` with the class's status code.
"""

from fastapi import status


class StockbookError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StockbookError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class MissingField(ValidationError):
    default_message = "Missing required field"


class InvalidCredentials(StockbookError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid credentials"


class AuthError(StockbookError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token is not valid"


class MissingToken(AuthError):
    default_message = "No token, authorization denied"


class MalformedToken(AuthError):
    default_message = "Token format is invalid"


class InvalidToken(AuthError):
    default_message = "Token is not valid"


class Forbidden(StockbookError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access forbidden"


class NotFound(StockbookError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ItemNotFound(NotFound):
    default_message = "Item not found"


class SeasonNotFound(NotFound):
    default_message = "Season not found"


class UserNotFound(NotFound):
    default_message = "User not found"


class Conflict(StockbookError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class DuplicateUser(Conflict):
    default_message = "User already exists"


class DuplicateItem(Conflict):
    default_message = "Item already exists"


class DuplicateSeason(Conflict):
    default_message = "Season already exists"


class InsufficientStock(Conflict):
    def __init__(self, current_stock: int, requested: int) -> None:
        self.current_stock = current_stock
        self.requested = requested
        super().__init__(
            f"Not enough stock available. Current stock: {current_stock}, Requested: {requested}"
        )


class InUse(Conflict):
    default_message = "Record has associated transactions"


class ItemInUse(InUse):
    default_message = "Cannot delete item because it has associated transactions"


class SeasonInUse(InUse):
    default_message = "Cannot delete season because it has associated transactions."


class Internal(StockbookError):
    pass
