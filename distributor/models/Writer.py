import csv
import json
from dataclasses import dataclass
from pathlib import Path

from distributor.models.Tree import MerkleTree


@dataclass
class Writer:
    """Exports a built merkle tree as json and csv files under `path`"""

    path: str

    @property
    def csv_path(self) -> str:
        return f"{self.path}/csv"

    @property
    def json_path(self) -> str:
        return f"{self.path}/json"

    @staticmethod
    def write_csv(data: list[dict], path: str, fieldnames: list[str]) -> None:
        with open(path, "w+", newline="") as f:
            writer = csv.writer(f, delimiter=",")
            writer.writerow(fieldnames)

            for row in data:
                writer.writerow([row[k] for k in fieldnames])

    # create the directory for csv and json if it doesn't exist
    def _create_dir(self) -> None:
        Path(self.path).mkdir(parents=True, exist_ok=True)
        Path(self.csv_path).mkdir(parents=True, exist_ok=True)
        Path(self.json_path).mkdir(parents=True, exist_ok=True)

    def to_csv(self, data: list[dict], name: str, fieldnames: list[str]) -> None:
        self._create_dir()
        self.write_csv(data, f"{self.csv_path}/{name}.csv", fieldnames)

    def to_json(self, data, name: str) -> None:
        self._create_dir()
        with open(f"{self.json_path}/{name}.json", "w") as f:
            json.dump(data, f, indent=4)

    def summary(self, tree: MerkleTree) -> dict:
        return {
            "merkle_root": tree.merkle_root,
            "hasher": tree.hasher,
            "max_num_nodes": tree.max_num_nodes,
            "max_total_claim": tree.max_total_claim,
        }

    def claims(self, tree: MerkleTree) -> list[dict]:
        # proofs are joined so each claimant stays on a single csv row
        return [
            {
                "claimant": node.claimant,
                "amount_unlocked": node.amount_unlocked,
                "amount_locked": node.amount_locked,
                "category": node.category or "",
                "proof": ":".join(node.proof or []),
            }
            for node in tree.tree_nodes
        ]

    def write_tree(self, tree: MerkleTree) -> None:
        summary = self.summary(tree)
        claims = self.claims(tree)

        self.to_json(summary, "summary")
        self.to_csv([summary], "summary", list(summary.keys()))

        self.to_json(claims, "claims")
        self.to_csv(
            claims,
            "claims",
            ["claimant", "amount_unlocked", "amount_locked", "category", "proof"],
        )
