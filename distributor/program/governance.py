"""Distributor creation, clawback and admin rotation"""

import eth_utils as eth

from distributor.errors import (
    AlreadyClawedBackError,
    ClawbackNotReadyError,
    UnauthorizedError,
)
from distributor.merkle.hasher import Hasher
from distributor.models import (
    AdminChangedEvent,
    Address,
    ClawbackEvent,
    ClawbackReceiverChangedEvent,
    DistributorRecord,
    HexHash,
    Timestamp,
)
from distributor.program.addresses import distributor_address, vault_address


def new_distributor(
    hasher: Hasher,
    root: HexHash,
    mint: Address,
    version: int,
    max_total_claim: int,
    max_num_nodes: int,
    start_ts: Timestamp,
    end_ts: Timestamp,
    clawback_start_ts: Timestamp,
    clawback_receiver: Address,
    admin: Address,
) -> DistributorRecord:
    """Build a fresh record, raises InvalidTimingError through the model validator"""
    address = distributor_address(hasher, mint, version)
    return DistributorRecord(
        address=address,
        version=version,
        root=root,
        mint=mint,
        token_vault=vault_address(hasher, address, mint),
        max_total_claim=max_total_claim,
        max_num_nodes=max_num_nodes,
        start_ts=start_ts,
        end_ts=end_ts,
        clawback_start_ts=clawback_start_ts,
        clawback_receiver=clawback_receiver,
        admin=admin,
    )


def clawback(
    distributor: DistributorRecord, vault_balance: int, now: Timestamp
) -> tuple[DistributorRecord, ClawbackEvent]:
    """
    Anyone may trigger clawback once clawback_start_ts has passed, the time gate is the only check.
    The whole vault balance goes to the clawback receiver and the distributor is closed for good.
    """
    if now < distributor.clawback_start_ts:
        raise ClawbackNotReadyError(
            f"Clawback opens at {distributor.clawback_start_ts}, it is {now}"
        )
    if distributor.clawed_back:
        raise AlreadyClawedBackError(f"{distributor.address} was already clawed back")

    updated = distributor.model_copy(update={"clawed_back": True})
    event = ClawbackEvent(
        distributor=distributor.address,
        timestamp=now,
        receiver=distributor.clawback_receiver,
        amount=vault_balance,
    )
    return updated, event


def check_admin(distributor: DistributorRecord, caller: Address) -> None:
    if eth.to_checksum_address(caller) != distributor.admin:
        raise UnauthorizedError(f"{caller} is not the admin of {distributor.address}")


def set_admin(
    distributor: DistributorRecord, caller: Address, new_admin: Address, now: Timestamp
) -> tuple[DistributorRecord, AdminChangedEvent]:
    check_admin(distributor, caller)
    new_admin = eth.to_checksum_address(new_admin)
    updated = distributor.model_copy(update={"admin": new_admin})
    event = AdminChangedEvent(
        distributor=distributor.address,
        timestamp=now,
        old_admin=distributor.admin,
        new_admin=new_admin,
    )
    return updated, event


def set_clawback_receiver(
    distributor: DistributorRecord,
    caller: Address,
    new_receiver: Address,
    now: Timestamp,
) -> tuple[DistributorRecord, ClawbackReceiverChangedEvent]:
    check_admin(distributor, caller)
    new_receiver = eth.to_checksum_address(new_receiver)
    updated = distributor.model_copy(update={"clawback_receiver": new_receiver})
    event = ClawbackReceiverChangedEvent(
        distributor=distributor.address,
        timestamp=now,
        old_receiver=distributor.clawback_receiver,
        new_receiver=new_receiver,
    )
    return updated, event
