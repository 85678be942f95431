import pytest

from distributor.merkle import verify, verify_node


def leaf_args(node):
    return node.claimant, node.amount_unlocked, node.amount_locked


def test_round_trip(tree, hasher):
    for node in tree.tree_nodes:
        assert verify_node(*leaf_args(node), node.proof_bytes(), tree.root_bytes, hasher)


def test_changed_amounts_fail(tree, hasher):
    for node in tree.tree_nodes:
        claimant, unlocked, locked = leaf_args(node)
        proof = node.proof_bytes()

        assert not verify_node(claimant, unlocked + 1, locked, proof, tree.root_bytes, hasher)
        assert not verify_node(claimant, unlocked, locked ^ 1, proof, tree.root_bytes, hasher)


@pytest.mark.parametrize("byte", range(20))
def test_flipping_a_claimant_byte_fails(tree, hasher, byte):
    node = tree.tree_nodes[0]
    raw = bytearray(bytes.fromhex(node.claimant[2:]))
    raw[byte] ^= 0xFF
    claimant = "0x" + raw.hex()

    assert not verify_node(
        claimant, node.amount_unlocked, node.amount_locked, node.proof_bytes(), tree.root_bytes, hasher
    )


def test_proof_is_bound_to_its_leaf(tree, hasher):
    a, b = tree.tree_nodes[0], tree.tree_nodes[1]

    assert not verify_node(*leaf_args(b), a.proof_bytes(), tree.root_bytes, hasher)
    assert not verify_node(*leaf_args(a), b.proof_bytes(), tree.root_bytes, hasher)


def test_tampered_proof_fails(tree, hasher):
    node = tree.tree_nodes[2]
    proof = node.proof_bytes()
    tampered = [bytes([proof[0][0] ^ 1]) + proof[0][1:]] + proof[1:]

    assert not verify_node(*leaf_args(node), tampered, tree.root_bytes, hasher)
    assert not verify_node(*leaf_args(node), proof[:-1], tree.root_bytes, hasher)
    assert not verify_node(*leaf_args(node), [], tree.root_bytes, hasher)


def test_root_must_match_exactly(tree, hasher):
    node = tree.tree_nodes[0]
    leaf = hasher.hash_leaf(*leaf_args(node))

    assert verify(node.proof_bytes(), tree.root_bytes, leaf, hasher)
    assert not verify(node.proof_bytes(), tree.root_bytes[:-1], leaf, hasher)
    assert not verify(node.proof_bytes(), tree.root_bytes + b"\x00", leaf, hasher)


def test_verification_is_repeatable(tree, hasher):
    node = tree.tree_nodes[3]
    results = {
        verify_node(*leaf_args(node), node.proof_bytes(), tree.root_bytes, hasher)
        for _ in range(5)
    }
    assert results == {True}
