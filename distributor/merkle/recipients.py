import csv
from decimal import Decimal
from typing import Optional

from distributor.errors import BadConfigException, EmptyInputError
from distributor.models import TreeNode

REQUIRED_COLUMNS = ["address", "amount_unlocked", "amount_locked"]


def to_token_amount(ui_amount: str, decimals: int) -> int:
    """Scale a human readable amount to base units, rejecting leftover fractions"""
    scaled = Decimal(ui_amount) * Decimal(10**decimals)
    if scaled != scaled.to_integral_value():
        raise BadConfigException(
            f"{ui_amount} has more precision than {decimals} decimals allow"
        )
    return int(scaled)


def parse_row(row: dict[str, str], decimals: int) -> TreeNode:
    category: Optional[str] = (row.get("category") or "").strip() or None
    return TreeNode(
        claimant=row["address"].strip(),
        amount_unlocked=to_token_amount(row["amount_unlocked"].strip(), decimals),
        amount_locked=to_token_amount(row["amount_locked"].strip(), decimals),
        category=category,
    )


def load_recipients_csv(path: str, decimals: int = 0) -> list[TreeNode]:
    """
    Read recipients from a csv with header `address,amount_unlocked,amount_locked[,category]`.
    Amounts are multiplied by 10**decimals, so pass the token decimals when the file holds UI amounts.
    """
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise BadConfigException(f"Recipient csv is missing columns {missing}")
        nodes = [parse_row(row, decimals) for row in reader if row["address"].strip()]

    if not nodes:
        raise EmptyInputError(f"No recipients found in {path}")
    return nodes
