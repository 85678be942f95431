from distributor.merkle.hasher import Hasher
from distributor.models.types import Address


def verify(proof: list[bytes], root: bytes, leaf: bytes, hasher: Hasher) -> bool:
    """Fold the proof into `leaf` and check the result is exactly `root`"""
    computed = leaf
    for sibling in proof:
        computed = hasher.hash_intermediate(computed, sibling)
    return computed == root


def verify_node(
    claimant: Address,
    amount_unlocked: int,
    amount_locked: int,
    proof: list[bytes],
    root: bytes,
    hasher: Hasher,
) -> bool:
    leaf = hasher.hash_leaf(claimant, amount_unlocked, amount_locked)
    return verify(proof, root, leaf, hasher)
