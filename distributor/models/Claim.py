from __future__ import annotations

from enum import Enum

import eth_utils as eth
from pydantic import BaseModel, field_validator

from distributor.models.types import Address, Timestamp
from distributor.utils import to_u64
from distributor.vesting import vested


class ClaimState(str, Enum):
    """
    :state UNCLAIMED: no claim record exists for the claimant
    :state PARTIALLY_CLAIMED: first claim made, some locked tokens not yet withdrawn
    :state FULLY_CLAIMED: every locked token has been withdrawn, terminal
    """

    UNCLAIMED = "unclaimed"
    PARTIALLY_CLAIMED = "partially_claimed"
    FULLY_CLAIMED = "fully_claimed"


class ClaimRecord(BaseModel):
    """
    Withdrawal progress of one claimant against one distributor.
    The record only exists once the first claim succeeded, so its presence is the double claim guard.
    :param `address`: storage key derived from claimant and distributor
    :param `locked_amount`: total locked allocation, fixed at creation
    :param `locked_amount_withdrawn`: only ever increases
    :param `unlocked_amount`: paid out by the first claim, kept for reference
    """

    address: Address
    distributor: Address
    claimant: Address
    locked_amount: int
    locked_amount_withdrawn: int = 0
    unlocked_amount: int

    @field_validator("address", "distributor", "claimant")
    @classmethod
    def checksum_address(cls, input: str):
        return eth.to_checksum_address(input)

    @field_validator("locked_amount", "locked_amount_withdrawn", "unlocked_amount")
    @classmethod
    def fits_u64(cls, amount: int):
        return to_u64(amount)

    @property
    def state(self) -> ClaimState:
        if self.locked_amount_withdrawn >= self.locked_amount:
            return ClaimState.FULLY_CLAIMED
        return ClaimState.PARTIALLY_CLAIMED

    def amount_withdrawable(
        self, now: Timestamp, start_ts: Timestamp, end_ts: Timestamp
    ) -> int:
        """Vested but not yet withdrawn, may be negative if called with an earlier `now`"""
        return (
            vested(now, start_ts, end_ts, self.locked_amount)
            - self.locked_amount_withdrawn
        )
