"""Structural summaries of a built tree: depth, leaf count and rules."""

from __future__ import annotations

from id3tree.tree.models import BinCondition, InternalNode, LeafNode, TreeNode, TreeRule


def tree_depth(node: TreeNode | None) -> int:
    """Return the number of splits on the longest root-to-leaf path.

    Args:
        node (TreeNode | None): The subtree root.

    Returns:
        int: `0` for a leaf or an empty tree.
    """
    if not isinstance(node, InternalNode):
        return 0
    return 1 + max((tree_depth(child) for child in node.children.values()), default=0)


def count_leaves(node: TreeNode | None) -> int:
    """Return the number of leaves below `node`.

    Args:
        node (TreeNode | None): The subtree root.

    Returns:
        int: The leaf count; `0` for an empty tree.
    """
    if node is None:
        return 0
    if isinstance(node, LeafNode):
        return 1
    return sum(count_leaves(child) for child in node.children.values())


def extract_rules(node: TreeNode | None) -> list[TreeRule]:
    """Extract one rule per leaf, walking children in ascending bin order.

    Args:
        node (TreeNode | None): The tree root.

    Returns:
        list[TreeRule]: The rules; empty for an empty tree.
    """
    rules: list[TreeRule] = []
    _walk(node, [], rules)
    return rules


def _walk(node: TreeNode | None, path: list[BinCondition], rules: list[TreeRule]) -> None:
    match node:
        case None:
            return
        case LeafNode(output_label=label):
            rules.append(TreeRule(conditions=path, prediction=label))
        case InternalNode(splitting_attribute=attribute, children=children):
            for bin_label in sorted(children):
                _walk(children[bin_label], [*path, BinCondition(attribute=attribute, bin=bin_label)], rules)
