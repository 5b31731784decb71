#!/usr/bin/env python3
"""Demo script for treewalk on a nested navigation menu.

This script demonstrates:
- Depth-first and breadth-first walks with per-visit context
- Early termination with break_loop()
- Searching for a node and reporting its breadcrumb
- Flattening the menu into rows for a table or database
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from treewalk import (
    find_node_by_dfs,
    flatten_tree_array,
    tree_stats,
    walk_tree,
    walk_tree_bfs,
)


MENU = [
    {
        "key": "home",
        "label": "Home",
    },
    {
        "key": "products",
        "label": "Products",
        "items": [
            {"key": "laptops", "label": "Laptops", "items": [
                {"key": "ultrabooks", "label": "Ultrabooks"},
                {"key": "gaming", "label": "Gaming"},
            ]},
            {"key": "phones", "label": "Phones"},
        ],
    },
    {
        "key": "support",
        "label": "Support",
        "items": {
            "faq": {"key": "faq", "label": "FAQ"},
            "contact": {"key": "contact", "label": "Contact us"},
        },
    },
]


def demo_depth_first():
    """Print the menu as an indented outline."""
    print("\n=== Depth-First Outline ===")

    def show(node, ctx, break_loop):
        marker = "-" if ctx.leaf else "+"
        print(f"{'  ' * ctx.level}{marker} {node['label']}")

    walk_tree(MENU, "items", show)


def demo_breadth_first():
    """Print the menu level by level, stopping at the first level-2 entry."""
    print("\n=== Breadth-First (stops at first level-2 entry) ===")

    def show(node, ctx, break_loop):
        print(f"level {ctx.level}: {node['label']}")
        if ctx.level == 2:
            break_loop()

    walk_tree_bfs(MENU, "items", show)


def demo_search():
    """Find an entry and print its breadcrumb."""
    print("\n=== Search ===")
    found = find_node_by_dfs(MENU, "key", "items", "gaming")
    if found is None:
        print("not found")
        return
    crumbs = [info.data["label"] for info in found.ancestors] + [found.target["label"]]
    print(" > ".join(crumbs))


def demo_flatten():
    """Flatten the menu into rows."""
    print("\n=== Flattened Rows ===")
    for row in flatten_tree_array(MENU, "items", "key"):
        print(f"{row['key']:<12} level={row['level']} parent={row['parent_id']}")

    stats = tree_stats(MENU, "items")
    print(f"\n{stats['total_nodes']} entries, {stats['leaf_nodes']} leaves, "
          f"max depth {stats['max_depth']}")


def main():
    demo_depth_first()
    demo_breadth_first()
    demo_search()
    demo_flatten()


if __name__ == "__main__":
    main()
