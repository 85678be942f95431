import eth_utils as eth

from distributor.merkle.hasher import Hasher
from distributor.models.types import Address
from distributor.utils import u64_le


def derive_address(hasher: Hasher, *seeds: bytes) -> Address:
    """Deterministic 20 byte identity, the last 20 bytes of the hash of `seeds`"""
    return eth.to_checksum_address(eth.encode_hex(hasher.hash(*seeds)[-20:]))


def distributor_address(hasher: Hasher, mint: Address, version: int) -> Address:
    return derive_address(
        hasher, b"MerkleDistributor", eth.to_canonical_address(mint), u64_le(version)
    )


def vault_address(hasher: Hasher, distributor: Address, mint: Address) -> Address:
    return derive_address(
        hasher,
        b"TokenVault",
        eth.to_canonical_address(distributor),
        eth.to_canonical_address(mint),
    )


def claim_address(hasher: Hasher, claimant: Address, distributor: Address) -> Address:
    return derive_address(
        hasher,
        b"ClaimStatus",
        eth.to_canonical_address(claimant),
        eth.to_canonical_address(distributor),
    )
