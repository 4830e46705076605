"""Custom exception hierarchy for mini-ledger."""


class LedgerError(Exception):
    """Base exception for all mini-ledger errors."""


class EntityNotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""


class AccountNotFoundError(EntityNotFoundError):
    """Raised when no account has the requested ID."""

    def __init__(
        self,
        account_id: int | None = None,
        message: str = "there is no account with this ID",
    ) -> None:
        super().__init__(message)
        self.account_id = account_id


class TransferNotFoundError(EntityNotFoundError):
    """Raised when no transfer has the requested ID."""

    def __init__(
        self,
        transfer_id: int | None = None,
        message: str = "there is no transfer with this ID",
    ) -> None:
        super().__init__(message)
        self.transfer_id = transfer_id


class ValidationError(LedgerError):
    """Raised when input data fails validation."""


class AuthorizationError(LedgerError):
    """Raised when a transfer is rejected by the authorization rules."""


class InvalidNameError(ValidationError):
    """Raised when an account name is empty."""

    def __init__(self, message: str = "invalid name: it cannot be empty") -> None:
        super().__init__(message)


class InvalidTaxIdError(ValidationError):
    """Raised when a CPF is not exactly 11 digits."""

    def __init__(self, message: str = "invalid cpf: it must have 11 numbers") -> None:
        super().__init__(message)


class InvalidAmountError(ValidationError, AuthorizationError):
    """Raised when an amount is zero or negative."""

    def __init__(self, message: str = "the amount entered is invalid") -> None:
        super().__init__(message)


class SameAccountError(AuthorizationError):
    """Raised when origin and destination are the same account."""

    def __init__(
        self, message: str = "origin and destination account ids are the same"
    ) -> None:
        super().__init__(message)


class InsufficientBalanceError(AuthorizationError):
    """Raised when the origin balance does not cover the amount."""

    def __init__(
        self,
        message: str = "origin account balance is too low to allow this transfer",
    ) -> None:
        super().__init__(message)


class ChargebackRiskError(AuthorizationError):
    """Raised when a transfer looks like a duplicate of a recent one."""

    def __init__(self, message: str = "this transfer seems to be duplicated") -> None:
        super().__init__(message)


class EmptyResultError(LedgerError):
    """Raised when a listing has nothing to return."""


class NoRecordsError(EmptyResultError):
    """Raised when there are no accounts to list."""

    def __init__(self, message: str = "there are no accounts to be listed") -> None:
        super().__init__(message)


class NoTransfersError(EmptyResultError):
    """Raised when there are no transfers to list."""

    def __init__(self, message: str = "there are no transfers to be listed") -> None:
        super().__init__(message)


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""


class SinkError(LedgerError):
    """Raised when a sink operation fails.

    ``subject`` is set when the failure hit an event for a record the
    ledger had already committed (the account or transfer ID as text).
    """

    def __init__(self, message: str = "sink operation failed", subject: str | None = None) -> None:
        super().__init__(message)
        self.subject = subject
