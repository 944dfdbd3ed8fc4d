"""id3tree: ID3 decision tree induction over schema-described tabular records."""

from loguru import logger

from id3tree.domains import CUSTOMER_SCHEMA, PRODUCT_SCHEMA, get_schema
from id3tree.evaluation import CrossValidationResult, cross_validate
from id3tree.logging import PACKAGE_NAME, enable_logging
from id3tree.records import LoadedRecords, Record, load_records
from id3tree.schema import AttributeSchema, CategoricalAttribute, ContinuousAttribute
from id3tree.tree import InternalNode, LeafNode, TreeNode, build_tree, predict

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the id3tree package by default

__all__ = [
    "CUSTOMER_SCHEMA",
    "PRODUCT_SCHEMA",
    "AttributeSchema",
    "CategoricalAttribute",
    "ContinuousAttribute",
    "CrossValidationResult",
    "InternalNode",
    "LeafNode",
    "LoadedRecords",
    "Record",
    "TreeNode",
    "build_tree",
    "cross_validate",
    "enable_logging",
    "get_schema",
    "load_records",
    "predict",
]
__version__ = "0.1.0"
