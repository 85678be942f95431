from dataclasses import dataclass

import eth_utils as eth
import pytest

from distributor.merkle import build_tree, get_hasher
from distributor.models import DB, TreeNode
from distributor.program import MerkleDistributorProgram

START_TS = 1_700_000_000
END_TS = START_TS + 3600
CLAWBACK_START_TS = END_TS + 24 * 60 * 60


@dataclass
class Clock:
    """Settable stand in for the host clock"""

    now: int

    def __call__(self) -> int:
        return self.now


@pytest.fixture()
def ADDRESSES():
    return [
        eth.to_checksum_address(a)
        for a in [
            "0x9bc33f6155eFAcc290c3C50E9B5b24b668562732",
            "0xfDe38ad4bBbeC867e6cb4Bb31FbFB2074c959A83",
            "0x8BB4C0b502f869af3B25166930507a6E8c3038D4",
            "0x7Ac54A0406FA2B465E0D57C66597BE83A4b149fC",
            "0xdeA708968f8dd520f5e2F0aB6785F28c98521ca8",
        ]
    ]


@pytest.fixture()
def MINT():
    return eth.to_checksum_address("0x1083D743A1E53805a95249fEf7310D75029f7Cd6")


@pytest.fixture()
def ADMIN(ADDRESSES):
    return ADDRESSES[4]


@pytest.fixture()
def RECEIVER():
    return eth.to_checksum_address("0x742d35Cc6634C0532925a3b844Bc454e4438f44e")


@pytest.fixture
def hasher():
    return get_hasher("sha256")


@pytest.fixture
def nodes(ADDRESSES) -> list[TreeNode]:
    """(A,100,50), (B,200,0), (C,0,300), (D,50,50)"""
    a, b, c, d = ADDRESSES[:4]
    return [
        TreeNode(claimant=a, amount_unlocked=100, amount_locked=50),
        TreeNode(claimant=b, amount_unlocked=200, amount_locked=0),
        TreeNode(claimant=c, amount_unlocked=0, amount_locked=300),
        TreeNode(claimant=d, amount_unlocked=50, amount_locked=50),
    ]


@pytest.fixture
def tree(nodes, hasher):
    return build_tree(nodes, hasher)


@pytest.fixture
def clock() -> Clock:
    return Clock(START_TS - 100)


@pytest.fixture
def db():
    return DB()


@pytest.fixture
def program(db, hasher, clock) -> MerkleDistributorProgram:
    return MerkleDistributorProgram(db, hasher=hasher, clock=clock)


def create_distributor(program, tree, mint, admin, receiver, **overrides):
    kwargs = dict(
        root=tree.merkle_root,
        mint=mint,
        max_total_claim=tree.max_total_claim,
        max_num_nodes=tree.max_num_nodes,
        start_ts=START_TS,
        end_ts=END_TS,
        clawback_start_ts=CLAWBACK_START_TS,
        clawback_receiver=receiver,
        admin=admin,
    )
    kwargs.update(overrides)
    return program.create_distributor(**kwargs)


@pytest.fixture
def distributor(program, tree, MINT, ADMIN, RECEIVER):
    """A distributor for the 4 node tree with its vault fully funded"""
    record = create_distributor(program, tree, MINT, ADMIN, RECEIVER)
    program.tokens.mint_to(MINT, record.token_vault, tree.max_total_claim)
    return record
