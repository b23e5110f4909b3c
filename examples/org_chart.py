#!/usr/bin/env python3
"""
Org chart example showing how DazzleForestLib turns flat rows into trees.

This example demonstrates:
- Building a forest from id/manager_id rows
- Walking it depth first and collecting leaf employees
- Copying the chart without a department
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzleforestlib import build_from_relation, get_tree_stats


ROWS = [
    {"id": 1, "manager": None, "name": "Ada", "dept": "exec"},
    {"id": 2, "manager": 1, "name": "Grace", "dept": "eng"},
    {"id": 3, "manager": 1, "name": "Linus", "dept": "ops"},
    {"id": 4, "manager": 2, "name": "Guido", "dept": "eng"},
    {"id": 5, "manager": 2, "name": "Barbara", "dept": "eng"},
    {"id": 6, "manager": 3, "name": "Ken", "dept": "ops"},
]


def print_tree(root):
    print(root.model["name"])
    for node in root.descendants():
        print("    " * node.depth() + node.model["name"])


def main():
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.WARNING)

    [ceo] = build_from_relation(ROWS, lambda r: r["id"], lambda r: r["manager"])

    print("Org chart:")
    print("-" * 50)
    print_tree(ceo)

    print("\nIndividual contributors:")
    for node in ceo.leaf_nodes():
        print(f"  {node.model['name']} ({node.model['dept']})")

    print("\nWithout ops:")
    print("-" * 50)
    print_tree(ceo.copy(lambda node: node.model["dept"] != "ops"))

    stats = get_tree_stats(ceo)
    print(f"\n{stats['total_nodes']} people, {stats['max_depth'] + 1} levels")


if __name__ == "__main__":
    main()
