from __future__ import annotations

import eth_utils as eth
from pydantic import BaseModel, field_validator, model_validator

from distributor.errors import InvalidTimingError
from distributor.models.types import (
    MIN_CLAWBACK_DELAY,
    Address,
    HexHash,
    Timestamp,
)
from distributor.utils import to_u64


def check_timing(
    start_ts: Timestamp, end_ts: Timestamp, clawback_start_ts: Timestamp
) -> None:
    """Vesting must not end before it starts, and clawback waits at least a day after the end"""
    if start_ts > end_ts:
        raise InvalidTimingError(f"Vesting ends at {end_ts} before it starts at {start_ts}")
    if clawback_start_ts < end_ts + MIN_CLAWBACK_DELAY:
        raise InvalidTimingError(
            f"Clawback at {clawback_start_ts} must be at least {MIN_CLAWBACK_DELAY}s after vesting ends at {end_ts}"
        )


class DistributorRecord(BaseModel):
    """
    State of a single distribution, one per (mint, version)
    :param `address`: identity derived from mint and version
    :param `root`: merkle root committing to every (claimant, unlocked, locked) leaf
    :param `token_vault`: token account holding the funds to distribute
    :param `total_amount_claimed`: running total of unlocked and vested tokens paid out
    :param `num_nodes_claimed`: number of claimants that made their first claim
    :param `clawed_back`: set once the remaining vault balance went to the clawback receiver
    """

    address: Address
    version: int
    root: HexHash
    mint: Address
    token_vault: Address
    max_total_claim: int
    max_num_nodes: int
    total_amount_claimed: int = 0
    num_nodes_claimed: int = 0
    start_ts: Timestamp
    end_ts: Timestamp
    clawback_start_ts: Timestamp
    clawback_receiver: Address
    admin: Address
    clawed_back: bool = False

    @field_validator("address", "mint", "token_vault", "clawback_receiver", "admin")
    @classmethod
    def checksum_address(cls, input: str):
        return eth.to_checksum_address(input)

    @field_validator(
        "version",
        "max_total_claim",
        "max_num_nodes",
        "total_amount_claimed",
        "num_nodes_claimed",
    )
    @classmethod
    def fits_u64(cls, amount: int):
        return to_u64(amount)

    @model_validator(mode="after")
    def validate_timing(self) -> DistributorRecord:
        check_timing(self.start_ts, self.end_ts, self.clawback_start_ts)
        return self

    @property
    def root_bytes(self) -> bytes:
        return eth.decode_hex(self.root)
