import eth_utils as eth

from distributor.errors import ArithmeticOverflowError, InvalidAddressError

U64_MAX = 2**64 - 1


def to_u64(amount: int) -> int:
    """Reject amounts that do not fit an unsigned 64 bit integer"""
    if amount < 0 or amount > U64_MAX:
        raise ArithmeticOverflowError(f"{amount} is outside the u64 range")
    return amount


def checked_add(a: int, b: int) -> int:
    return to_u64(a + b)


def checked_sub(a: int, b: int) -> int:
    return to_u64(a - b)


def u64_le(amount: int) -> bytes:
    """Little endian encoding used when hashing amounts and versions"""
    return to_u64(amount).to_bytes(8, "little")



def checksum(address: str) -> str:
    try:
        return eth.to_checksum_address(address)
    except ValueError as e:
        raise InvalidAddressError(f"{address} is not a valid address") from e
