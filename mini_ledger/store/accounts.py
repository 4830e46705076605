"""Account store with ID issuance and validation."""

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import datetime

from mini_ledger.exceptions import AccountNotFoundError, NoRecordsError
from mini_ledger.models import Account
from mini_ledger.store.sequence import IdSequence
from mini_ledger.validation import validate_balance, validate_cpf, validate_name

logger = logging.getLogger(__name__)


class AccountLedger:
    """In-memory store holding the authoritative set of accounts.

    Parameters
    ----------
    starting_id : int
        Seed for account IDs; the first created account gets ``starting_id + 1``.
    accounts : Iterable[Account]
        Records to pre-load, keyed by their own ``account_id``. No ID may
        exceed ``starting_id``, otherwise ``ValueError`` is raised.
    clock : Callable[[], datetime]
        Source of ``created_at`` timestamps.
    """

    def __init__(
        self,
        starting_id: int = 0,
        accounts: Iterable[Account] = (),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._ids = IdSequence(starting_id)
        self._clock = clock
        self._lock = threading.Lock()
        self._accounts: dict[int, Account] = {a.account_id: a for a in accounts}
        if self._accounts and max(self._accounts) > starting_id:
            raise ValueError(
                f"preloaded account ID {max(self._accounts)} is above starting_id {starting_id}"
            )

    def create_account(self, name: str, cpf: str, balance: int) -> int:
        """Validate and store a new account.

        Parameters
        ----------
        name : str
            Holder name; must not be blank.
        cpf : str
            Holder CPF, exactly 11 digits.
        balance : int
            Opening balance in cents.

        Returns
        -------
        int
            The new account ID.

        Raises
        ------
        InvalidNameError
            If the name is blank.
        InvalidTaxIdError
            If the CPF is not 11 digits.
        InvalidAmountError
            If the balance is negative.
        """
        name = validate_name(name)
        cpf = validate_cpf(cpf)
        balance = validate_balance(balance)

        account_id = self._ids.next()
        account = Account(
            account_id=account_id,
            name=name,
            cpf=cpf,
            balance=balance,
            created_at=self._clock(),
        )
        with self._lock:
            self._accounts[account_id] = account

        logger.debug("Created account %d", account_id, extra={"account_id": account_id})
        return account_id

    def get_account(self, account_id: int) -> Account:
        """Return the account with the given ID."""
        with self._lock:
            account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def get_balance(self, account_id: int) -> int:
        """Return the balance in cents of the given account."""
        return self.get_account(account_id).balance

    def set_account(self, account: Account) -> None:
        """Replace the stored record for ``account.account_id``."""
        with self._lock:
            self._accounts[account.account_id] = account

    def list_all(self) -> list[Account]:
        """Return every account sorted by ID.

        Raises
        ------
        NoRecordsError
            If the store is empty.
        """
        with self._lock:
            accounts = list(self._accounts.values())
        if not accounts:
            raise NoRecordsError()
        return sorted(accounts, key=lambda a: a.account_id)

    @property
    def max_id(self) -> int:
        """Last issued account ID."""
        return self._ids.current

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)
