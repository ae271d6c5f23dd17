# fintrack/domain/exceptions.py


class FinanceError(Exception):
    """Base class for every error raised by the finance core."""


class TransactionNotFound(FinanceError, LookupError):
    def __init__(self, transaction_id=None):
        self.transaction_id = transaction_id
        if transaction_id is None:
            message = "Transaction not found"
        else:
            message = f"Transaction not found with ID: {transaction_id}"
        super().__init__(message)


class UnauthorizedAccess(FinanceError, PermissionError):
    def __init__(self, message: str = "Unauthorized: This is not your transaction"):
        super().__init__(message)


class InvalidTransaction(FinanceError, ValueError):
    pass


class InvalidDayOfMonth(InvalidTransaction):
    def __init__(self, day_of_month):
        self.day_of_month = day_of_month
        super().__init__(f"Day of month must be between 1 and 31, got {day_of_month}")


class InvalidDate(InvalidTransaction):
    pass


class UnsupportedVariantChange(InvalidTransaction):
    pass
