from __future__ import annotations

import eth_utils as eth
from pydantic import BaseModel, field_validator, model_validator

from distributor.errors import BadConfigException
from distributor.models.Distributor import check_timing
from distributor.models.types import Address, Timestamp


class DistributorConfig(BaseModel):
    """
    Arguments for creating a distributor from a built merkle tree
    :param `version`: lets the same mint run several distributions side by side
    :param `clawback_receiver`: where unclaimed funds go once clawback opens
    :param `merkle_tree_path`: json file written by the tree builder
    """

    mint: Address
    version: int = 0
    admin: Address
    clawback_receiver: Address
    start_vesting_ts: Timestamp
    end_vesting_ts: Timestamp
    clawback_start_ts: Timestamp
    merkle_tree_path: str

    @field_validator("mint", "admin", "clawback_receiver")
    @classmethod
    def checksum_address(cls, input: str):
        return eth.to_checksum_address(input)

    @field_validator("version")
    @classmethod
    def validate_version(cls, version: int):
        if version < 0:
            raise BadConfigException("Version must not be negative")
        return version

    @model_validator(mode="after")
    def validate_timing(self) -> DistributorConfig:
        check_timing(self.start_vesting_ts, self.end_vesting_ts, self.clawback_start_ts)
        return self
