import pytest

from distributor.errors import ArithmeticOverflowError
from distributor.utils import U64_MAX
from distributor.vesting import vested

START = 1_000
END = 2_000


@pytest.mark.parametrize(
    "now, expected",
    [
        [0, 0],
        [START, 0],
        [START + 1, 0],
        [START + 250, 75],
        [START + 500, 150],
        [END - 1, 299],
        [END, 300],
        [END + 10_000, 300],
    ],
)
def test_vested(now, expected):
    assert vested(now, START, END, 300) == expected


def test_monotonic():
    amounts = [vested(t, START, END, 12_345) for t in range(START - 10, END + 10)]

    assert amounts == sorted(amounts)
    assert amounts[0] == 0
    assert amounts[-1] == 12_345


def test_zero_length_window():
    assert vested(START - 1, START, START, 100) == 0
    assert vested(START, START, START, 100) == 0
    assert vested(START + 1, START, START, 100) == 100


def test_large_amounts_do_not_lose_precision():
    ten_years = 10 * 365 * 24 * 60 * 60
    now = START + ten_years // 3

    result = vested(now, START, START + ten_years, U64_MAX)

    assert result == (ten_years // 3) * U64_MAX // ten_years
    assert 0 < result < U64_MAX


def test_negative_amount():
    with pytest.raises(ArithmeticOverflowError):
        vested(START, START, END, -1)
