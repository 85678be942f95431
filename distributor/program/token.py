import threading

import eth_utils as eth
from tinydb import TinyDB, where

from distributor.errors import InsufficientFundsError
from distributor.models.types import Address
from distributor.utils import checked_add, checked_sub, to_u64


class TokenLedger:
    """
    Balances per (mint, owner), stored in the `token_accounts` table.
    Transfers either move the full amount or raise and leave both balances untouched.
    """

    def __init__(self, db: TinyDB):
        self.db = db
        self._lock = threading.Lock()

    @property
    def accounts(self):
        return self.db.table("token_accounts")

    @staticmethod
    def _account(mint: Address, owner: Address):
        return (where("mint") == eth.to_checksum_address(mint)) & (
            where("owner") == eth.to_checksum_address(owner)
        )

    def _set_balance(self, mint: Address, owner: Address, amount: int) -> None:
        self.accounts.upsert(
            {
                "mint": eth.to_checksum_address(mint),
                "owner": eth.to_checksum_address(owner),
                "amount": amount,
            },
            self._account(mint, owner),
        )

    def balance(self, mint: Address, owner: Address) -> int:
        doc = self.accounts.get(self._account(mint, owner))
        return doc["amount"] if doc else 0

    def mint_to(self, mint: Address, owner: Address, amount: int) -> int:
        """Create `amount` new tokens in the owner's account, returns the new balance"""
        with self._lock:
            new_balance = checked_add(self.balance(mint, owner), to_u64(amount))
            self._set_balance(mint, owner, new_balance)
        return new_balance

    def transfer(
        self, mint: Address, source: Address, destination: Address, amount: int
    ) -> None:
        to_u64(amount)
        with self._lock:
            source_balance = self.balance(mint, source)
            if source_balance < amount:
                raise InsufficientFundsError(
                    f"{source} holds {source_balance}, cannot transfer {amount}"
                )
            if eth.to_checksum_address(source) == eth.to_checksum_address(destination):
                return
            new_destination = checked_add(self.balance(mint, destination), amount)
            self._set_balance(mint, source, checked_sub(source_balance, amount))
            self._set_balance(mint, destination, new_destination)
