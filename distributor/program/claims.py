"""
Claim state machine.

A claimant starts UNCLAIMED, `new_claim` creates their record and pays the
unlocked amount (PARTIALLY_CLAIMED), and `claim_locked` pays whatever vested
since the last withdrawal until everything locked is withdrawn (FULLY_CLAIMED).

These functions only compute the next state. They never write, so a failed
check leaves nothing behind; `MerkleDistributorProgram` persists the result and
moves the tokens.
"""

from typing import Optional

from distributor.errors import (
    AlreadyClaimedError,
    ClaimExpiredError,
    InvalidProofError,
    MaxClaimsExceededError,
    MaxTotalClaimExceededError,
    NoClaimError,
    NothingToClaimError,
)
from distributor.merkle.hasher import Hasher
from distributor.merkle.verify import verify_node
from distributor.models import (
    Address,
    ClaimedEvent,
    ClaimRecord,
    ClaimState,
    DistributorRecord,
    NewClaimEvent,
    Timestamp,
)
from distributor.program.addresses import claim_address
from distributor.utils import checked_add


def add_claimed(distributor: DistributorRecord, amount: int) -> int:
    """New total_amount_claimed after paying out `amount`, capped at max_total_claim"""
    total = checked_add(distributor.total_amount_claimed, amount)
    if total > distributor.max_total_claim:
        raise MaxTotalClaimExceededError(
            f"Claiming {amount} takes {distributor.address} past its max total claim of {distributor.max_total_claim}"
        )
    return total


def claim_state(claim: Optional[ClaimRecord]) -> ClaimState:
    if claim is None:
        return ClaimState.UNCLAIMED
    return claim.state


def new_claim(
    distributor: DistributorRecord,
    claimant: Address,
    amount_unlocked: int,
    amount_locked: int,
    proof: list[bytes],
    hasher: Hasher,
    now: Timestamp,
    existing: Optional[ClaimRecord] = None,
) -> tuple[DistributorRecord, ClaimRecord, NewClaimEvent]:
    """
    Check a first claim against the distributor and build the resulting state.
    `existing` is the claimant's stored record, if any. The storage insert still
    has the final word on uniqueness.
    """
    if distributor.clawed_back:
        raise ClaimExpiredError(f"{distributor.address} has been clawed back")

    if not verify_node(
        claimant,
        amount_unlocked,
        amount_locked,
        proof,
        distributor.root_bytes,
        hasher,
    ):
        raise InvalidProofError(f"Proof for {claimant} does not match the root")

    if distributor.num_nodes_claimed >= distributor.max_num_nodes:
        raise MaxClaimsExceededError(
            f"All {distributor.max_num_nodes} nodes of {distributor.address} have claimed"
        )

    if existing is not None:
        raise AlreadyClaimedError(
            f"{existing.claimant} already claimed from {distributor.address}"
        )

    claim = ClaimRecord(
        address=claim_address(hasher, claimant, distributor.address),
        distributor=distributor.address,
        claimant=claimant,
        locked_amount=amount_locked,
        locked_amount_withdrawn=0,
        unlocked_amount=amount_unlocked,
    )
    updated = distributor.model_copy(
        update={
            "num_nodes_claimed": checked_add(distributor.num_nodes_claimed, 1),
            "total_amount_claimed": add_claimed(distributor, amount_unlocked),
        }
    )
    event = NewClaimEvent(
        distributor=distributor.address,
        timestamp=now,
        claimant=claim.claimant,
        amount_unlocked=amount_unlocked,
        amount_locked=amount_locked,
    )
    return updated, claim, event


def claim_locked(
    distributor: DistributorRecord,
    claim: Optional[ClaimRecord],
    now: Timestamp,
) -> tuple[DistributorRecord, ClaimRecord, ClaimedEvent]:
    """Release everything vested since the last withdrawal"""
    if distributor.clawed_back:
        raise ClaimExpiredError(f"{distributor.address} has been clawed back")

    if claim is None:
        raise NoClaimError("Make a first claim before withdrawing locked tokens")

    amount = claim.amount_withdrawable(now, distributor.start_ts, distributor.end_ts)
    if amount <= 0:
        raise NothingToClaimError(f"No newly vested tokens for {claim.claimant}")

    withdrawn = checked_add(claim.locked_amount_withdrawn, amount)
    if withdrawn > claim.locked_amount:
        raise MaxTotalClaimExceededError(
            f"{claim.claimant} would withdraw {withdrawn} of {claim.locked_amount} locked"
        )

    updated_distributor = distributor.model_copy(
        update={"total_amount_claimed": add_claimed(distributor, amount)}
    )
    updated_claim = claim.model_copy(update={"locked_amount_withdrawn": withdrawn})
    event = ClaimedEvent(
        distributor=distributor.address,
        timestamp=now,
        claimant=claim.claimant,
        amount=amount,
        remaining_seconds=max(distributor.end_ts - now, 0),
    )
    return updated_distributor, updated_claim, event
