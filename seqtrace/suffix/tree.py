"""Naive suffix-tree construction with a snapshot per inserted suffix.

Suffixes are inserted shortest first into a compressed trie. An edge that
only partly matches the incoming suffix is split at the mismatch, and the
rest of the suffix hangs off the split node as a new leaf. The unique
terminator guarantees every suffix ends at its own leaf.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from seqtrace.utils.logging import get_logger

_LOGGER = get_logger("suffix.tree")


@dataclass(slots=True)
class SuffixNode:
    node_id: str
    label: str
    children: list[SuffixNode] = field(default_factory=list)
    suffix_index: int | None = None

    @property
    def is_leaf(self) -> bool:
        return self.suffix_index is not None

    def clone(self) -> SuffixNode:
        return SuffixNode(
            node_id=self.node_id,
            label=self.label,
            children=[child.clone() for child in self.children],
            suffix_index=self.suffix_index,
        )

    def leaves(self) -> list[int]:
        """Suffix indices of every leaf below this node."""
        if self.suffix_index is not None:
            return [self.suffix_index]
        found: list[int] = []
        for child in self.children:
            found.extend(child.leaves())
        return found

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "id": self.node_id,
            "label": self.label,
            "is_leaf": self.is_leaf,
            "children": [child.to_dict() for child in self.children],
        }
        if self.suffix_index is not None:
            payload["suffix_index"] = self.suffix_index
        return payload


@dataclass(frozen=True, slots=True)
class SuffixStep:
    step_number: int
    suffix: str
    suffix_index: int
    description: str
    tree: SuffixNode

    def to_dict(self) -> dict[str, object]:
        return {
            "step_number": self.step_number,
            "suffix": self.suffix,
            "suffix_index": self.suffix_index,
            "description": self.description,
            "tree": self.tree.to_dict(),
        }


def _common_prefix(first: str, second: str) -> int:
    length = 0
    for a, b in zip(first, second):
        if a != b:
            break
        length += 1
    return length


@dataclass(slots=True)
class SuffixTree:
    """Compressed suffix trie of ``text`` (terminator included)."""

    text: str
    root: SuffixNode = field(default_factory=lambda: SuffixNode("root", ""))
    steps: list[SuffixStep] = field(default_factory=list)
    _splits: int = field(default=0, init=False, repr=False)

    def insert(self, suffix_index: int) -> str:
        """Insert ``text[suffix_index:]`` and describe what changed."""
        current = self.root
        remaining = self.text[suffix_index:]
        while remaining:
            for position, child in enumerate(current.children):
                shared = _common_prefix(child.label, remaining)
                if shared == 0:
                    continue
                if shared == len(child.label):
                    current = child
                    remaining = remaining[shared:]
                    break
                self._splits += 1
                split = SuffixNode(f"node-{self._splits}", child.label[:shared])
                child.label = child.label[shared:]
                leaf = SuffixNode(f"leaf-{suffix_index}", remaining[shared:], suffix_index=suffix_index)
                split.children = [child, leaf]
                current.children[position] = split
                return f"Split edge at '{split.label}' and added leaf '{leaf.label}'."
            else:
                current.children.append(SuffixNode(f"leaf-{suffix_index}", remaining, suffix_index=suffix_index))
                return f"Added new leaf '{remaining}'."
        msg = f"suffix {suffix_index} is a prefix of another suffix; the terminator must be unique"
        raise RuntimeError(msg)

    def find(self, pattern: str) -> list[int]:
        """Sorted start positions of every occurrence of ``pattern``."""
        if not pattern:
            msg = "pattern must be non-empty"
            raise ValueError(msg)
        current = self.root
        remaining = pattern
        while remaining:
            for child in current.children:
                shared = _common_prefix(child.label, remaining)
                if shared == 0:
                    continue
                if shared == len(remaining):
                    return sorted(child.leaves())
                if shared < len(child.label):
                    return []
                current = child
                remaining = remaining[shared:]
                break
            else:
                return []
        return sorted(current.leaves())

    @property
    def leaf_count(self) -> int:
        return len(self.root.leaves())

    def to_dict(self, *, include_trace: bool = True) -> dict[str, object]:
        payload: dict[str, object] = {"text": self.text, "tree": self.root.to_dict()}
        if include_trace:
            payload["steps"] = [step.to_dict() for step in self.steps]
        return payload


def build_suffix_tree(text: str, terminator: str = "$") -> SuffixTree:
    """Build the suffix tree of ``text + terminator`` and record every insertion.

    Raises
    ------
    ValueError
        If ``terminator`` is not a single character absent from ``text``.
    """
    if len(terminator) != 1:
        msg = f"terminator must be a single character, got {terminator!r}"
        raise ValueError(msg)
    if terminator in text:
        msg = f"terminator {terminator!r} must not occur in the text"
        raise ValueError(msg)

    tree = SuffixTree(text + terminator)
    _LOGGER.info("Building suffix tree for %d characters", len(tree.text))
    for step_number, suffix_index in enumerate(range(len(tree.text) - 1, -1, -1), start=1):
        change = tree.insert(suffix_index)
        suffix = tree.text[suffix_index:]
        tree.steps.append(
            SuffixStep(
                step_number=step_number,
                suffix=suffix,
                suffix_index=suffix_index,
                description=f"Inserted suffix '{suffix}' starting at position {suffix_index}. {change}",
                tree=tree.root.clone(),
            )
        )
    return tree
