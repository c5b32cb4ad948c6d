import abc

from eth_account import Account
from eth_keys.exceptions import ValidationError as KeyValidationError


class InvalidSignerKeyError(ValueError):
    """Raised when the operator key cannot be decoded into a secp256k1 key.

    This is a misconfiguration, retrying will not help.
    """


class Signer(abc.ABC):
    """Signs transactions on behalf of a single sending address."""

    @property
    @abc.abstractmethod
    def address(self) -> str:
        ...

    @abc.abstractmethod
    def sign_transaction(self, transaction: dict):
        """Return the signed transaction, exposing ``raw_transaction``."""


class LocalKeySigner(Signer):
    """Signer backed by a hex encoded private key held in memory.

    The key is decoded on every call and never cached as a key object.
    """

    def __init__(self, private_key: str):
        self._private_key = private_key
        # fail at construction rather than on the first transaction
        self._load_account()

    def _load_account(self):
        try:
            return Account.from_key(self._private_key)
        except (ValueError, TypeError, KeyValidationError) as e:
            raise InvalidSignerKeyError(f"Invalid signer private key: {e}") from e

    @property
    def address(self) -> str:
        return self._load_account().address

    def sign_transaction(self, transaction: dict):
        account = self._load_account()
        return account.sign_transaction(transaction)

    def __repr__(self):
        return f"LocalKeySigner(address={self.address})"
