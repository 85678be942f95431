"""
Hashing shared by the tree builder and the proof verifier.

Both sides must agree byte for byte, so the leaf encoding, the domain separation
prefixes and the order in which two children are combined are all pinned here
and nowhere else.
"""

import hashlib
from dataclasses import dataclass
from typing import Callable, Optional

import eth_utils as eth

from distributor.env import SETTINGS
from distributor.errors import UnknownHasherError
from distributor.models.types import Address
from distributor.utils import u64_le

# leaves and intermediate nodes are hashed under different prefixes so an
# intermediate node can never be passed off as a leaf (second preimage)
LEAF_PREFIX = b"\x00"
INTERMEDIATE_PREFIX = b"\x01"

HashFunction = Callable[[bytes], bytes]


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def keccak256(data: bytes) -> bytes:
    return eth.keccak(data)


HASHERS: dict[str, HashFunction] = {
    "sha256": sha256,
    "keccak256": keccak256,
}


@dataclass(frozen=True)
class Hasher:
    """
    A named, collision resistant hash function
    :param `name`: registry key, recorded alongside trees so verifiers can pick the same function
    :param `fn`: maps a byte string to a 32 byte digest
    """

    name: str
    fn: HashFunction

    def hash(self, *parts: bytes) -> bytes:
        return self.fn(b"".join(parts))

    def hash_leaf(
        self, claimant: Address, amount_unlocked: int, amount_locked: int
    ) -> bytes:
        """H(LEAF_PREFIX || H(claimant || u64le(unlocked) || u64le(locked)))"""
        node = self.hash(
            eth.to_canonical_address(claimant),
            u64_le(amount_unlocked),
            u64_le(amount_locked),
        )
        return self.hash(LEAF_PREFIX, node)

    def hash_intermediate(self, a: bytes, b: bytes) -> bytes:
        """
        Parent of two nodes. Children are sorted before hashing so the result
        does not depend on which side of the tree each child sits, and proofs
        only need the sibling hashes.
        """
        if a <= b:
            return self.hash(INTERMEDIATE_PREFIX, a, b)
        return self.hash(INTERMEDIATE_PREFIX, b, a)


def register_hasher(name: str, fn: HashFunction) -> Hasher:
    """Make an application chosen hash function available by name"""
    HASHERS[name] = fn
    return Hasher(name, fn)


def get_hasher(name: Optional[str] = None) -> Hasher:
    """Look up a hasher by name, falling back to the DISTRIBUTOR_HASHER setting"""
    name = name or SETTINGS.HASHER
    if name not in HASHERS:
        raise UnknownHasherError(
            f"No hasher registered as {name}, choose from {list(HASHERS)}"
        )
    return Hasher(name, HASHERS[name])
