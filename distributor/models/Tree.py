from __future__ import annotations

from typing import Optional

import eth_utils as eth
from pydantic import BaseModel, field_validator

from distributor.errors import MissingClaimantError
from distributor.models.types import Address, HexHash
from distributor.utils import to_u64


class Recipient(BaseModel):
    """Base class for a claimant with a checksummed address"""

    claimant: Address

    @field_validator("claimant")
    @classmethod
    def checksum_address(cls, input: str):
        return eth.to_checksum_address(input)


class TreeNode(Recipient):
    """
    One leaf of the distribution
    :param `amount_unlocked`: released in full by the first claim
    :param `amount_locked`: released linearly over the vesting window
    :param `category`: free text label carried over from the recipient list
    :param `proof`: sibling hashes from this leaf up to the root, set once the tree is built
    """

    amount_unlocked: int
    amount_locked: int
    category: Optional[str] = None
    proof: Optional[list[HexHash]] = None

    @field_validator("amount_unlocked", "amount_locked")
    @classmethod
    def fits_u64(cls, amount: int):
        return to_u64(amount)

    def proof_bytes(self) -> list[bytes]:
        return [eth.decode_hex(p) for p in self.proof or []]


class MerkleTree(BaseModel):
    """
    Output of the tree builder, enough to create a distributor and to serve proofs to claimants
    :param `merkle_root`: the commitment stored on the distributor
    :param `max_num_nodes`: number of leaves, caps how many first claims can succeed
    :param `max_total_claim`: unlocked plus locked amounts over all leaves
    :param `hasher`: name of the hash function the tree was built with
    """

    merkle_root: HexHash
    max_num_nodes: int
    max_total_claim: int
    hasher: str
    tree_nodes: list[TreeNode]

    @property
    def root_bytes(self) -> bytes:
        return eth.decode_hex(self.merkle_root)

    def get_node(self, claimant: Address) -> TreeNode:
        address = eth.to_checksum_address(claimant)
        for node in self.tree_nodes:
            if node.claimant == address:
                return node
        raise MissingClaimantError(f"{address} is not part of this distribution")

    def write_to_file(self, path: str) -> None:
        with open(path, "w+") as f:
            f.write(self.model_dump_json(indent=4))

    @staticmethod
    def new_from_file(path: str) -> MerkleTree:
        with open(path) as f:
            return MerkleTree.model_validate_json(f.read())
