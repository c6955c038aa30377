"""Accounts, files and the network services the commands work against."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Protocol, Sequence

from flowcli.address import Address
from flowcli.model import Transaction, TransactionResult

DEFAULT_SERVICE_ACCOUNT = "emulator-account"


class AccountNotFoundError(LookupError):
    """No account with the requested name is configured."""

    def __init__(self, name: str) -> None:
        super().__init__(f"could not find account with name {name}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


@dataclass
class Account:
    """A named account from the configuration."""

    name: str
    address: Address
    key: Optional[str] = None


class Accounts:
    """An ordered collection of accounts, unique by name."""

    def __init__(self, accounts: Sequence[Account] = ()) -> None:
        self._accounts: list[Account] = []
        for account in accounts:
            self.add_or_update(account)

    def by_name(self, name: str) -> Account:
        for account in self._accounts:
            if account.name == name:
                return account
        raise AccountNotFoundError(name)

    def add_or_update(self, account: Account) -> None:
        """Replace the account with the same name, or append it."""
        for position, existing in enumerate(self._accounts):
            if existing.name == account.name:
                self._accounts[position] = account
                return
        self._accounts.append(account)

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)


class MemoryReaderWriter:
    """A file store held in memory."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}

    def read_file(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError:
            raise FileNotFoundError(f"open {path}: file does not exist") from None

    def write_file(self, path: str, data) -> None:
        self._files[path] = data.encode() if isinstance(data, str) else bytes(data)


@dataclass
class State:
    """Configured accounts and the files they are read alongside."""

    reader_writer: Any
    accounts: Accounts = field(default_factory=Accounts)
    service_account: str = DEFAULT_SERVICE_ACCOUNT

    def read_file(self, path: str) -> bytes:
        return self.reader_writer.read_file(path)


class Services(Protocol):
    """Operations against a Flow access node."""

    def build_transaction(
        self,
        *,
        proposer: Address,
        authorizers: list[Address],
        payer: Address,
        proposer_key_index: int,
        code: bytes,
        arguments: list[bytes],
        location: str,
        gas_limit: int,
    ) -> Transaction:
        """Build an unsigned transaction."""
        ...

    def send_transaction(
        self,
        *,
        proposer: Account,
        authorizers: list[Account],
        payer: Account,
        code: bytes,
        arguments: list[bytes],
        location: str,
        gas_limit: int,
    ) -> tuple[Transaction, Optional[TransactionResult]]:
        """Sign and send a transaction and wait for its result."""
        ...

    def send_signed_transaction(
        self, tx: Transaction
    ) -> tuple[Transaction, Optional[TransactionResult]]:
        """Send an already signed transaction."""
        ...

    def sign_transaction_payload(self, signer: Account, payload: bytes) -> Transaction:
        """Sign a hex-encoded transaction payload."""
        ...

    def get_transaction_by_id(
        self, tx_id: bytes, sealed: bool
    ) -> tuple[Transaction, Optional[TransactionResult]]:
        """Fetch a transaction and its result."""
        ...

    def get_block(self, query: Any) -> Any:
        """Fetch a block; the returned object has an ``id``."""
        ...

    def get_system_transaction(
        self, block_id: bytes
    ) -> tuple[Transaction, Optional[TransactionResult]]:
        """Fetch the system transaction of a block."""
        ...