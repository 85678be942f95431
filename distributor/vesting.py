from distributor.errors import ArithmeticOverflowError


def vested(now: int, start_ts: int, end_ts: int, locked_amount: int) -> int:
    """
    Amount of `locked_amount` released by `now`, linearly between `start_ts` and `end_ts`.

    Python integers do not overflow, so `elapsed * locked_amount` is exact before
    the floor division. A zero length window is settled by the first two branches.
    """
    if locked_amount < 0:
        raise ArithmeticOverflowError(f"Negative locked amount {locked_amount}")
    if now <= start_ts:
        return 0
    if now >= end_ts:
        return locked_amount
    return (now - start_ts) * locked_amount // (end_ts - start_ts)
