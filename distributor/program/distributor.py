import threading
import time
from typing import Callable, Optional, Union

import eth_utils as eth

from distributor.errors import DistributorError, DistributorMismatchError
from distributor.merkle.hasher import Hasher, get_hasher
from distributor.models import (
    DB,
    AdminChangedEvent,
    Address,
    ClaimedEvent,
    ClaimState,
    ClawbackEvent,
    ClawbackReceiverChangedEvent,
    DistributorConfig,
    DistributorRecord,
    HexHash,
    MerkleTree,
    NewClaimEvent,
    Timestamp,
)
from distributor.program import claims, governance
from distributor.program.addresses import claim_address, distributor_address
from distributor.program.token import TokenLedger
from distributor.utils import checksum


def now_ts() -> Timestamp:
    return int(time.time())


def check_distributor_matches(
    record: DistributorRecord, tree: MerkleTree, config: DistributorConfig
) -> None:
    """Make sure an existing distributor was created from this tree and config"""
    expected = {
        "root": tree.merkle_root,
        "max_total_claim": tree.max_total_claim,
        "max_num_nodes": tree.max_num_nodes,
        "start_ts": config.start_vesting_ts,
        "end_ts": config.end_vesting_ts,
        "clawback_start_ts": config.clawback_start_ts,
        "clawback_receiver": config.clawback_receiver,
        "admin": config.admin,
    }
    for field, value in expected.items():
        if getattr(record, field) != value:
            raise DistributorMismatchError(f"{field} mismatch")


class MerkleDistributorProgram:
    """
    Entry point for every distributor operation.

    Each call reads the records it needs, computes the next state, moves tokens and
    writes the result while holding the program lock, so concurrent callers never
    interleave on the shared counters, on a claimant's withdrawn amount, or with a
    clawback sweeping the vault.
    :param `db`: where distributors, claims and events are stored
    :param `tokens`: token ledger, defaults to one sharing `db`
    :param `hasher`: must be the hasher the merkle tree was built with
    :param `clock`: returns the current unix timestamp
    """

    def __init__(
        self,
        db: DB,
        tokens: Optional[TokenLedger] = None,
        hasher: Optional[Hasher] = None,
        clock: Optional[Callable[[], Timestamp]] = None,
    ):
        self.db = db
        self.tokens = tokens or TokenLedger(db)
        self.hasher = hasher or get_hasher()
        self.clock = clock or now_ts
        self._lock = threading.RLock()

    def distributor_address(self, mint: Address, version: int = 0) -> Address:
        return distributor_address(self.hasher, mint, version)

    def get_distributor(self, distributor: Address) -> DistributorRecord:
        return self.db.get_distributor(distributor)

    def create_distributor(
        self,
        root: HexHash,
        mint: Address,
        max_total_claim: int,
        max_num_nodes: int,
        start_ts: Timestamp,
        end_ts: Timestamp,
        clawback_start_ts: Timestamp,
        clawback_receiver: Address,
        admin: Address,
        version: int = 0,
    ) -> DistributorRecord:
        record = governance.new_distributor(
            self.hasher,
            root=root,
            mint=mint,
            version=version,
            max_total_claim=max_total_claim,
            max_num_nodes=max_num_nodes,
            start_ts=start_ts,
            end_ts=end_ts,
            clawback_start_ts=clawback_start_ts,
            clawback_receiver=clawback_receiver,
            admin=admin,
        )
        with self._lock:
            self.db.insert_distributor(record)
        return record

    def create_distributor_from_tree(
        self, tree: MerkleTree, config: DistributorConfig
    ) -> DistributorRecord:
        if tree.hasher != self.hasher.name:
            raise DistributorMismatchError(
                f"Tree was built with {tree.hasher}, program uses {self.hasher.name}"
            )
        return self.create_distributor(
            root=tree.merkle_root,
            mint=config.mint,
            version=config.version,
            max_total_claim=tree.max_total_claim,
            max_num_nodes=tree.max_num_nodes,
            start_ts=config.start_vesting_ts,
            end_ts=config.end_vesting_ts,
            clawback_start_ts=config.clawback_start_ts,
            clawback_receiver=config.clawback_receiver,
            admin=config.admin,
        )

    def claim_status(self, distributor: Address, claimant: Address) -> ClaimState:
        address = claim_address(self.hasher, checksum(claimant), distributor)
        return claims.claim_state(self.db.find_claim(address))

    def new_claim(
        self,
        distributor: Address,
        claimant: Address,
        amount_unlocked: int,
        amount_locked: int,
        proof: list[Union[bytes, HexHash]],
    ) -> NewClaimEvent:
        claimant = checksum(claimant)
        proof_bytes = [p if isinstance(p, bytes) else eth.decode_hex(p) for p in proof]

        with self._lock:
            record = self.db.get_distributor(distributor)
            existing = self.db.find_claim(
                claim_address(self.hasher, claimant, record.address)
            )
            updated, claim, event = claims.new_claim(
                record,
                claimant,
                amount_unlocked,
                amount_locked,
                proof_bytes,
                self.hasher,
                self.clock(),
                existing,
            )

            # raises if another caller inserted the record first
            self.db.insert_claim(claim)
            try:
                self.tokens.transfer(
                    record.mint, record.token_vault, claim.claimant, amount_unlocked
                )
            except DistributorError:
                self.db.discard_claim(claim.address)
                raise

            self.db.update_distributor(updated)
            self.db.write_event(event)
        return event

    def claim_locked(self, distributor: Address, claimant: Address) -> ClaimedEvent:
        claimant = checksum(claimant)
        with self._lock:
            record = self.db.get_distributor(distributor)
            claim = self.db.find_claim(
                claim_address(self.hasher, claimant, record.address)
            )
            updated, updated_claim, event = claims.claim_locked(
                record, claim, self.clock()
            )

            self.tokens.transfer(
                record.mint, record.token_vault, updated_claim.claimant, event.amount
            )
            self.db.update_claim(updated_claim)
            self.db.update_distributor(updated)
            self.db.write_event(event)
        return event

    def clawback(self, distributor: Address) -> ClawbackEvent:
        with self._lock:
            record = self.db.get_distributor(distributor)
            balance = self.tokens.balance(record.mint, record.token_vault)
            updated, event = governance.clawback(record, balance, self.clock())

            self.tokens.transfer(
                record.mint, record.token_vault, record.clawback_receiver, balance
            )
            self.db.update_distributor(updated)
            self.db.write_event(event)
        return event

    def set_admin(
        self, distributor: Address, caller: Address, new_admin: Address
    ) -> AdminChangedEvent:
        with self._lock:
            record = self.db.get_distributor(distributor)
            updated, event = governance.set_admin(
                record, checksum(caller), checksum(new_admin), self.clock()
            )
            self.db.update_distributor(updated)
            self.db.write_event(event)
        return event

    def set_clawback_receiver(
        self, distributor: Address, caller: Address, new_receiver: Address
    ) -> ClawbackReceiverChangedEvent:
        with self._lock:
            record = self.db.get_distributor(distributor)
            updated, event = governance.set_clawback_receiver(
                record, checksum(caller), checksum(new_receiver), self.clock()
            )
            self.db.update_distributor(updated)
            self.db.write_event(event)
        return event
