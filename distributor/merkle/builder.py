"""
Offline construction of the distribution tree.

Leaves keep the order of the recipient list. Pairs are combined with
`Hasher.hash_intermediate`. When a level has an odd number of nodes the last
node is promoted to the next level unchanged, so its proof simply has no
sibling for that level.
"""

from typing import Optional

import eth_utils as eth

from distributor.errors import DuplicateClaimantError, EmptyInputError
from distributor.merkle.hasher import Hasher, get_hasher
from distributor.models import MerkleTree, TreeNode
from distributor.utils import checked_add


def build_levels(leaves: list[bytes], hasher: Hasher) -> list[list[bytes]]:
    """All levels of the tree, leaves first and the root level last"""
    if not leaves:
        raise EmptyInputError("Cannot build a tree without leaves")

    levels = [leaves]
    current = leaves
    while len(current) > 1:
        parents = []
        for i in range(0, len(current), 2):
            if i + 1 < len(current):
                parents.append(hasher.hash_intermediate(current[i], current[i + 1]))
            else:
                parents.append(current[i])
        levels.append(parents)
        current = parents
    return levels


def get_proof(levels: list[list[bytes]], index: int) -> list[bytes]:
    """Sibling hashes from leaf `index` up to, but excluding, the root"""
    proof = []
    for level in levels[:-1]:
        sibling = index ^ 1
        if sibling < len(level):
            proof.append(level[sibling])
        index //= 2
    return proof


def check_unique(nodes: list[TreeNode]) -> None:
    seen: set[str] = set()
    for node in nodes:
        if node.claimant in seen:
            raise DuplicateClaimantError(f"{node.claimant} appears more than once")
        seen.add(node.claimant)


def build_tree(nodes: list[TreeNode], hasher: Optional[Hasher] = None) -> MerkleTree:
    """
    Hash every recipient into a leaf, build the tree and attach a proof to each node.

    :param `nodes`: recipients in the order they should appear as leaves
    :param `hasher`: defaults to the DISTRIBUTOR_HASHER setting
    """
    hasher = hasher or get_hasher()
    if not nodes:
        raise EmptyInputError("Recipient list is empty")
    check_unique(nodes)

    leaves = [
        hasher.hash_leaf(n.claimant, n.amount_unlocked, n.amount_locked) for n in nodes
    ]
    levels = build_levels(leaves, hasher)

    max_total_claim = 0
    tree_nodes = []
    for index, node in enumerate(nodes):
        max_total_claim = checked_add(max_total_claim, node.amount_unlocked)
        max_total_claim = checked_add(max_total_claim, node.amount_locked)
        proof = [eth.encode_hex(p) for p in get_proof(levels, index)]
        tree_nodes.append(node.model_copy(update={"proof": proof}))

    return MerkleTree(
        merkle_root=eth.encode_hex(levels[-1][0]),
        max_num_nodes=len(nodes),
        max_total_claim=max_total_claim,
        hasher=hasher.name,
        tree_nodes=tree_nodes,
    )
