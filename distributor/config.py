import calendar
import datetime
from typing import NamedTuple

from distributor.errors import BadConfigException
from distributor.models import DistributorConfig, MerkleTree


class VestingWindow(NamedTuple):
    start_ts: int
    end_ts: int
    clawback_start_ts: int


def add_months(date: datetime.datetime, months: int) -> datetime.datetime:
    month_index = date.month - 1 + months
    year = date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(date.day, calendar.monthrange(year, month)[1])
    return date.replace(year=year, month=month, day=day)


def get_vesting_window(
    start: datetime.date, months: int, clawback_delay_days: int = 1
) -> VestingWindow:
    """Vesting from midnight UTC on `start` for a number of calendar months.

    Args:
        start (date): first day of vesting
        months (int): length of the window, 0 releases everything at `start`
        clawback_delay_days (int): days after vesting ends before clawback opens, at least 1
    """
    if months < 0:
        raise BadConfigException("Vesting cannot last a negative number of months")

    if clawback_delay_days < 1:
        raise BadConfigException("Clawback must open at least one day after vesting ends")

    start_date = datetime.datetime(
        start.year, start.month, start.day, tzinfo=datetime.timezone.utc
    )
    end_date = add_months(start_date, months)
    clawback_date = end_date + datetime.timedelta(days=clawback_delay_days)

    return VestingWindow(
        int(start_date.timestamp()),
        int(end_date.timestamp()),
        int(clawback_date.timestamp()),
    )


def load_distributor_config(path: str) -> DistributorConfig:
    """Loads the arguments for a new distributor from a json file"""
    with open(path) as f:
        return DistributorConfig.model_validate_json(f.read())


def load_merkle_tree(path: str) -> MerkleTree:
    return MerkleTree.new_from_file(path)
