import datetime
import json
import os

import pytest

from distributor.config import get_vesting_window, load_distributor_config
from distributor.errors import BadConfigException, InvalidTimingError
from distributor.models import DistributorConfig

STUBS = os.path.join(os.path.dirname(os.path.dirname(__file__)), "stubs")


@pytest.fixture
def config_dict() -> dict:
    with open(f"{STUBS}/distributor-config.json") as f:
        return json.load(f)


def test_load_config(config_dict):
    config = load_distributor_config(f"{STUBS}/distributor-config.json")

    assert config.mint == "0x1083D743A1E53805a95249fEf7310D75029f7Cd6"
    assert config.version == 0
    assert config.end_vesting_ts - config.start_vesting_ts == 3600
    assert config.merkle_tree_path == "merkle_tree.json"


def test_addresses_are_checksummed(config_dict):
    config_dict["admin"] = config_dict["admin"].lower()
    config = DistributorConfig(**config_dict)
    assert config.admin == "0xdeA708968f8dd520f5e2F0aB6785F28c98521ca8"


def test_negative_version(config_dict):
    config_dict["version"] = -1
    with pytest.raises(BadConfigException, match="Version"):
        DistributorConfig(**config_dict)


@pytest.mark.parametrize(
    "field, value",
    [
        ["start_vesting_ts", 1700003601],
        ["clawback_start_ts", 1700003600 + 24 * 60 * 60 - 1],
    ],
)
def test_bad_timing(config_dict, field, value):
    config_dict[field] = value
    with pytest.raises(InvalidTimingError):
        DistributorConfig(**config_dict)


def test_get_vesting_window():
    window = get_vesting_window(datetime.date(2023, 1, 31), 1)

    start = datetime.datetime(2023, 1, 31, tzinfo=datetime.timezone.utc)
    end = datetime.datetime(2023, 2, 28, tzinfo=datetime.timezone.utc)
    assert window.start_ts == int(start.timestamp())
    assert window.end_ts == int(end.timestamp())
    assert window.clawback_start_ts == window.end_ts + 24 * 60 * 60


def test_get_vesting_window_across_years():
    window = get_vesting_window(datetime.date(2023, 11, 15), 14, clawback_delay_days=7)

    end = datetime.datetime(2025, 1, 15, tzinfo=datetime.timezone.utc)
    assert window.end_ts == int(end.timestamp())
    assert window.clawback_start_ts - window.end_ts == 7 * 24 * 60 * 60


def test_get_vesting_window_zero_months():
    window = get_vesting_window(datetime.date(2023, 6, 1), 0)
    assert window.start_ts == window.end_ts


def test_get_vesting_window_invalid():
    with pytest.raises(BadConfigException):
        get_vesting_window(datetime.date(2023, 6, 1), -1)
    with pytest.raises(BadConfigException):
        get_vesting_window(datetime.date(2023, 6, 1), 12, clawback_delay_days=0)
