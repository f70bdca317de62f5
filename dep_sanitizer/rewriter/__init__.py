"""Rewriter layer: line classification, block matching, transforms."""

from dep_sanitizer.rewriter.block import (
    AnyListMatcher,
    BlockMatcher,
    BlockRewriter,
    TargetBlockMatcher,
)
from dep_sanitizer.rewriter.classifier import (
    LineClassifier,
    block_ends,
    deps_block_start,
    exports_block_start,
    list_block_start,
)
from dep_sanitizer.rewriter.transforms import add_lines, remove_lines, sort_lines

__all__ = [
    "AnyListMatcher",
    "BlockMatcher",
    "BlockRewriter",
    "LineClassifier",
    "TargetBlockMatcher",
    "add_lines",
    "block_ends",
    "deps_block_start",
    "exports_block_start",
    "list_block_start",
    "remove_lines",
    "sort_lines",
]
