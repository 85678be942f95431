from typing import Literal, Union

from pydantic import BaseModel

from distributor.models.types import Address, Timestamp


class Event(BaseModel):
    """Base class for the audit trail written by every successful operation"""

    distributor: Address
    timestamp: Timestamp


class NewClaimEvent(Event):
    kind: Literal["new_claim"] = "new_claim"
    claimant: Address
    amount_unlocked: int
    amount_locked: int


class ClaimedEvent(Event):
    """
    :param `amount`: locked tokens withdrawn by this call
    :param `remaining_seconds`: time left until the claimant is fully vested
    """

    kind: Literal["claimed"] = "claimed"
    claimant: Address
    amount: int
    remaining_seconds: int


class ClawbackEvent(Event):
    kind: Literal["clawback"] = "clawback"
    receiver: Address
    amount: int


class AdminChangedEvent(Event):
    kind: Literal["admin_changed"] = "admin_changed"
    old_admin: Address
    new_admin: Address


class ClawbackReceiverChangedEvent(Event):
    kind: Literal["clawback_receiver_changed"] = "clawback_receiver_changed"
    old_receiver: Address
    new_receiver: Address


AnyEvent = Union[
    NewClaimEvent,
    ClaimedEvent,
    ClawbackEvent,
    AdminChangedEvent,
    ClawbackReceiverChangedEvent,
]
