from typing import Union

import eth_utils as eth
import fire

from distributor.config import load_distributor_config, load_merkle_tree
from distributor.env import SETTINGS
from distributor.errors import MissingDistributorError, NothingToClaimError
from distributor.merkle import build_tree, get_hasher, load_recipients_csv
from distributor.models import DB, ClaimState, Writer
from distributor.program import MerkleDistributorProgram, check_distributor_matches


def get_program(db_path: str = "") -> MerkleDistributorProgram:
    return MerkleDistributorProgram(DB(db_path or SETTINGS.DB_PATH))


def as_address(value: Union[str, int]) -> str:
    """fire parses unquoted 0x... arguments as integers, turn them back into addresses"""
    if isinstance(value, int):
        return eth.to_checksum_address(f"0x{value:040x}")
    return eth.to_checksum_address(value)


def create_merkle_tree(
    csv_path: str,
    merkle_tree_path: str,
    decimals: int = 0,
    hasher: str = "",
    out_dir: str = "",
) -> str:
    """Build the merkle tree from a recipient csv and save it as json"""
    nodes = load_recipients_csv(csv_path, decimals)
    tree = build_tree(nodes, get_hasher(hasher or None))
    tree.write_to_file(merkle_tree_path)

    if out_dir:
        Writer(out_dir).write_tree(tree)

    print(f"🌳 Built a tree of {tree.max_num_nodes} nodes, root {tree.merkle_root}")
    print(f"💰 Max total claim: {tree.max_total_claim}")
    return tree.merkle_root


def new_distributor(config_path: str, db_path: str = "") -> str:
    """Create a distributor from a config file, or check an existing one matches it"""
    config = load_distributor_config(config_path)
    tree = load_merkle_tree(config.merkle_tree_path)
    program = get_program(db_path)

    address = program.distributor_address(config.mint, config.version)
    existing = program.db.find_distributor(address)
    if existing:
        print("merkle distributor exists, checking parameters...")
        check_distributor_matches(existing, tree, config)
        print(f"✅ Distributor {address} matches the config")
        return address

    record = program.create_distributor_from_tree(tree, config)
    print(f"🚀 Distributor created: {record.address}")
    print(f"  Token vault: {record.token_vault}")
    print("Next step: fund the vault with")
    print(f"  fund --mint {record.mint} --amount {record.max_total_claim}")
    return record.address


def fund(mint: str, amount: int, version: int = 0, db_path: str = "") -> int:
    """Mint tokens straight into a distributor's vault"""
    program = get_program(db_path)
    record = program.get_distributor(
        program.distributor_address(as_address(mint), version)
    )
    balance = program.tokens.mint_to(record.mint, record.token_vault, amount)
    print(f"💸 Vault {record.token_vault} now holds {balance}")
    return balance


def claim(
    merkle_tree_path: str, claimant: str, mint: str, version: int = 0, db_path: str = ""
) -> int:
    """Make the first claim if needed, then withdraw whatever has vested"""
    program = get_program(db_path)
    claimant = as_address(claimant)
    distributor = program.distributor_address(as_address(mint), version)
    claimed = 0

    if program.claim_status(distributor, claimant) == ClaimState.UNCLAIMED:
        print(f"No claim found for {claimant}, creating one...")
        node = load_merkle_tree(merkle_tree_path).get_node(claimant)
        event = program.new_claim(
            distributor,
            node.claimant,
            node.amount_unlocked,
            node.amount_locked,
            node.proof or [],
        )
        claimed += event.amount_unlocked
        print(f"✅ Claimed {event.amount_unlocked} unlocked tokens")

        if node.amount_locked == 0:
            return claimed

        try:
            locked_event = program.claim_locked(distributor, claimant)
        except NothingToClaimError:
            print("⏳ Nothing has vested yet, come back once vesting starts")
            return claimed
    else:
        locked_event = program.claim_locked(distributor, claimant)

    claimed += locked_event.amount
    days, seconds = divmod(locked_event.remaining_seconds, 24 * 60 * 60)
    print(
        f"✅ Withdrew {locked_event.amount} with {days} days and {seconds} seconds left in lockup"
    )
    return claimed


def clawback(mint: str, version: int = 0, db_path: str = "") -> int:
    program = get_program(db_path)
    event = program.clawback(program.distributor_address(as_address(mint), version))
    print(f"🦅 Clawed back {event.amount} to {event.receiver}")
    return event.amount


def set_admin(
    mint: str, caller: str, new_admin: str, version: int = 0, db_path: str = ""
) -> str:
    program = get_program(db_path)
    event = program.set_admin(
        program.distributor_address(as_address(mint), version),
        as_address(caller),
        as_address(new_admin),
    )
    print(f"👑 Admin changed from {event.old_admin} to {event.new_admin}")
    return event.new_admin


def set_clawback_receiver(
    mint: str, caller: str, new_receiver: str, version: int = 0, db_path: str = ""
) -> str:
    program = get_program(db_path)
    event = program.set_clawback_receiver(
        program.distributor_address(as_address(mint), version),
        as_address(caller),
        as_address(new_receiver),
    )
    print(f"📬 Clawback receiver changed to {event.new_receiver}")
    return event.new_receiver


def status(mint: str, claimant: str = "", version: int = 0, db_path: str = "") -> dict:
    """Show the distributor record, and the claimant's progress if one is given"""
    program = get_program(db_path)
    address = program.distributor_address(as_address(mint), version)
    record = program.db.find_distributor(address)
    if record is None:
        raise MissingDistributorError(
            f"No distributor for mint {mint} version {version}"
        )

    out = record.model_dump()
    out["vault_balance"] = program.tokens.balance(record.mint, record.token_vault)
    if claimant:
        out["claim_state"] = program.claim_status(address, as_address(claimant)).value
    return out


def main():
    fire.Fire(
        {
            "create-merkle-tree": create_merkle_tree,
            "new-distributor": new_distributor,
            "fund": fund,
            "claim": claim,
            "clawback": clawback,
            "set-admin": set_admin,
            "set-clawback-receiver": set_clawback_receiver,
            "status": status,
        }
    )


if __name__ == "__main__":
    main()
