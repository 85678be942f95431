import os
import threading
from typing import Optional

import eth_utils as eth
from tinydb import TinyDB, where
from tinydb.storages import MemoryStorage

from distributor.errors import (
    AlreadyClaimedError,
    DistributorExistsError,
    MissingDistributorError,
)
from distributor.models.Claim import ClaimRecord
from distributor.models.Distributor import DistributorRecord
from distributor.models.Event import AnyEvent
from distributor.models.types import Address


class DB(TinyDB):
    """
    Persistent state for distributors and their claim records.
    Claim records are keyed by their derived address and created with insert-if-absent,
    which is what stops a claimant from making a first claim twice.

    Pass no path to keep everything in memory.
    """

    def __init__(self, path: Optional[str] = None, drop=False, **kwargs):
        self._claim_lock = threading.Lock()

        if path is None:
            super().__init__(storage=MemoryStorage, **kwargs)
        else:
            # check if the directory exists
            create_dirs = self.exists(path) == False
            super().__init__(
                path,
                indent=4,
                create_dirs=create_dirs,
                **kwargs,
            )

        if drop:
            self.drop_tables()

    @staticmethod
    def exists(path: str):
        return os.path.exists(path)

    # distributors

    def find_distributor(self, address: Address) -> Optional[DistributorRecord]:
        address = eth.to_checksum_address(address)
        doc = self.table("distributors").get(where("address") == address)
        return DistributorRecord(**doc) if doc else None

    def get_distributor(self, address: Address) -> DistributorRecord:
        record = self.find_distributor(address)
        if record is None:
            raise MissingDistributorError(f"No distributor at {address}")
        return record

    def insert_distributor(self, record: DistributorRecord) -> None:
        table = self.table("distributors")
        if table.contains(where("address") == record.address):
            raise DistributorExistsError(f"Distributor {record.address} already exists")
        table.insert(record.model_dump())

    def update_distributor(self, record: DistributorRecord) -> None:
        self.table("distributors").update(
            record.model_dump(), where("address") == record.address
        )

    # claims

    def find_claim(self, address: Address) -> Optional[ClaimRecord]:
        address = eth.to_checksum_address(address)
        doc = self.table("claims").get(where("address") == address)
        return ClaimRecord(**doc) if doc else None

    def insert_claim(self, record: ClaimRecord) -> None:
        """Create the record if no record exists at its address, fail otherwise"""
        table = self.table("claims")
        with self._claim_lock:
            if table.contains(where("address") == record.address):
                raise AlreadyClaimedError(
                    f"{record.claimant} already claimed from {record.distributor}"
                )
            table.insert(record.model_dump())

    def update_claim(self, record: ClaimRecord) -> None:
        self.table("claims").update(
            record.model_dump(), where("address") == record.address
        )

    def discard_claim(self, address: Address) -> None:
        """Undo an insert whose invocation failed before completing"""
        self.table("claims").remove(where("address") == address)

    def claims(self, distributor: Address) -> list[ClaimRecord]:
        return [
            ClaimRecord(**doc)
            for doc in self.table("claims").search(where("distributor") == distributor)
        ]

    # events

    def write_event(self, event: AnyEvent) -> None:
        self.table("events").insert(event.model_dump())

    def events(self, distributor: Address) -> list[dict]:
        return self.table("events").search(where("distributor") == distributor)
