"""Suffix-tree construction trace."""

from .tree import SuffixNode, SuffixStep, SuffixTree, build_suffix_tree

__all__ = ["SuffixNode", "SuffixStep", "SuffixTree", "build_suffix_tree"]
