"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidAmountError(DomainException):
    """Value cannot be represented as a decimal amount"""

    pass


class InvalidPeriodCountError(DomainException):
    """Number of periods is not a positive integer"""

    pass


class InvalidPeriodError(DomainException):
    """Period index falls outside 1..num_periods"""

    pass


class InvalidCreditLimitError(DomainException):
    """Credit limit must be strictly positive"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction day or amount is malformed"""

    pass
