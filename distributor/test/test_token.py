import pytest

from distributor.errors import ArithmeticOverflowError, InsufficientFundsError
from distributor.program import TokenLedger
from distributor.utils import U64_MAX


@pytest.fixture
def ledger(db) -> TokenLedger:
    return TokenLedger(db)


def test_empty_balance(ledger, MINT, ADDRESSES):
    assert ledger.balance(MINT, ADDRESSES[0]) == 0


def test_mint_to(ledger, MINT, ADDRESSES):
    assert ledger.mint_to(MINT, ADDRESSES[0], 100) == 100
    assert ledger.mint_to(MINT, ADDRESSES[0].lower(), 50) == 150
    assert ledger.balance(MINT, ADDRESSES[0]) == 150

    # balances are per mint
    assert ledger.balance(ADDRESSES[1], ADDRESSES[0]) == 0


def test_mint_overflow(ledger, MINT, ADDRESSES):
    ledger.mint_to(MINT, ADDRESSES[0], U64_MAX)
    with pytest.raises(ArithmeticOverflowError):
        ledger.mint_to(MINT, ADDRESSES[0], 1)
    assert ledger.balance(MINT, ADDRESSES[0]) == U64_MAX


def test_transfer(ledger, MINT, ADDRESSES):
    a, b = ADDRESSES[:2]
    ledger.mint_to(MINT, a, 100)
    ledger.transfer(MINT, a, b, 40)

    assert ledger.balance(MINT, a) == 60
    assert ledger.balance(MINT, b) == 40

    ledger.transfer(MINT, a, b, 60)
    assert ledger.balance(MINT, a) == 0
    assert ledger.balance(MINT, b) == 100


def test_transfer_insufficient(ledger, MINT, ADDRESSES):
    a, b = ADDRESSES[:2]
    ledger.mint_to(MINT, a, 10)

    with pytest.raises(InsufficientFundsError):
        ledger.transfer(MINT, a, b, 11)

    assert ledger.balance(MINT, a) == 10
    assert ledger.balance(MINT, b) == 0


def test_transfer_to_self(ledger, MINT, ADDRESSES):
    ledger.mint_to(MINT, ADDRESSES[0], 10)
    ledger.transfer(MINT, ADDRESSES[0], ADDRESSES[0], 10)
    assert ledger.balance(MINT, ADDRESSES[0]) == 10


def test_transfer_negative(ledger, MINT, ADDRESSES):
    ledger.mint_to(MINT, ADDRESSES[0], 10)
    with pytest.raises(ArithmeticOverflowError):
        ledger.transfer(MINT, ADDRESSES[0], ADDRESSES[1], -1)
