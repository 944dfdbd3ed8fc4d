"""Decision tree sub-package: node models, entropy, training, prediction and inspection."""

from __future__ import annotations

from id3tree.tree.entropy import EMPTY_ENTROPY_SENTINEL, best_attribute, entropy, information_gain, partition
from id3tree.tree.inspection import count_leaves, extract_rules, tree_depth
from id3tree.tree.models import BinCondition, InternalNode, LeafNode, TreeNode, TreeRule
from id3tree.tree.prediction import predict, predict_all
from id3tree.tree.training import (
    DEFAULT_PURITY_THRESHOLD,
    RemainingAttributes,
    build_tree,
    grow_tree,
    majority_label,
    pure_label,
)

__all__ = [
    "DEFAULT_PURITY_THRESHOLD",
    "EMPTY_ENTROPY_SENTINEL",
    "BinCondition",
    "InternalNode",
    "LeafNode",
    "RemainingAttributes",
    "TreeNode",
    "TreeRule",
    "best_attribute",
    "build_tree",
    "count_leaves",
    "entropy",
    "extract_rules",
    "grow_tree",
    "information_gain",
    "majority_label",
    "partition",
    "predict",
    "predict_all",
    "pure_label",
    "tree_depth",
]
