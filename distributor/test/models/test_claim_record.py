import pytest

from distributor.errors import ArithmeticOverflowError
from distributor.models import ClaimRecord, ClaimState

START = 1000
END = 2000


@pytest.fixture
def claim(ADDRESSES) -> ClaimRecord:
    return ClaimRecord(
        address=ADDRESSES[2].lower(),
        distributor=ADDRESSES[1],
        claimant=ADDRESSES[0],
        locked_amount=1000,
        unlocked_amount=10,
    )


def test_checksummed(claim, ADDRESSES):
    assert claim.address == ADDRESSES[2]


def test_state(claim):
    assert claim.state == ClaimState.PARTIALLY_CLAIMED

    done = claim.model_copy(update={"locked_amount_withdrawn": 1000})
    assert done.state == ClaimState.FULLY_CLAIMED


def test_nothing_locked_is_fully_claimed(claim):
    assert claim.model_copy(update={"locked_amount": 0}).state == ClaimState.FULLY_CLAIMED


@pytest.mark.parametrize(
    "now, withdrawn, expected",
    [
        [START, 0, 0],
        [START + 500, 0, 500],
        [START + 500, 200, 300],
        [END, 1000, 0],
        [START + 100, 500, -400],
    ],
)
def test_amount_withdrawable(claim, now, withdrawn, expected):
    claim = claim.model_copy(update={"locked_amount_withdrawn": withdrawn})
    assert claim.amount_withdrawable(now, START, END) == expected


def test_amounts_fit_u64(claim):
    dct = claim.model_dump()
    dct["locked_amount"] = 2**64
    with pytest.raises(ArithmeticOverflowError):
        ClaimRecord(**dct)
