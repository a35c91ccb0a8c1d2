"""Zero dependency path mapping trie with variable and wildcard segments.

Each node corresponds to one template prefix. Lookup walks the trie once,
never backtracking, so its cost depends on path depth only.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pathmapper.match import Match

T = TypeVar("T")

Tokenizer = Callable[[str], Sequence[str]]

WILDCARD = "*"
VARIABLE_PREFIX = ":"


@dataclass(slots=True)
class Node(Generic[T]):
    """Segment-based trie node.

    Mutated in place by `add_handler`. There is no internal locking: finish
    registering before sharing a tree between readers, or guard both reads
    and writes with one caller-owned lock.
    """

    handler: T | None = field(default=None)
    children: dict[str, Node[T]] = field(default_factory=dict)
    variable: Node[T] | None = field(default=None)
    variable_name: str | None = field(default=None)  # label of the variable edge
    wildcard: bool = field(default=False)
    variable_names: tuple[str, ...] = field(default=())
    template: str | None = field(default=None)


def tokenize(path: str) -> list[str]:
    """Split on "/" and drop empty segments.

    Leading, trailing and repeated slashes are irrelevant:

        tokenize("//a//:var//b//") == ["a", ":var", "b"]
    """
    return [seg for seg in path.split("/") if seg]


def is_variable(seg: str) -> bool:
    return len(seg) > 1 and seg.startswith(VARIABLE_PREFIX)


def add_handler(
    tree: Node[T],
    template: str,
    handler: T,
    tokenizer: Tokenizer = tokenize,
) -> T | None:
    """Register handler at template, returning the handler it replaced.

    Segments after a wildcard are ignored. The landed node's handler and
    variable names are overwritten together, so the last registration of an
    identical effective template wins.
    """
    current = tree
    names: list[str] = []
    parts: list[str] = []
    for seg in tokenizer(template):
        if is_variable(seg):
            name = seg[1:]
            names.append(name)
            parts.append(seg)
            if current.variable is None:
                current.variable = Node()
            current.variable_name = name  # shared branch, last name wins
            current = current.variable
        elif seg == WILDCARD:
            current.wildcard = True
            parts.append(seg)
            break
        else:
            parts.append(seg)
            child = current.children.get(seg)
            if child is None:
                child = current.children[seg] = Node()
            current = child

    previous = current.handler
    current.handler = handler
    current.variable_names = tuple(names)
    current.template = "/" + "/".join(parts)
    return previous


def find_handler(
    tree: Node[T],
    path: str,
    tokenizer: Tokenizer = tokenize,
    *,
    allow_partial: bool = False,
) -> Match[T] | None:
    """Traverses the tree to find the match for path.

    Each segment priority is: literal match > wildcard > variable match.
    A wildcard node consumes every remaining segment and terminates the
    traversal. Returns None when nothing matches.

    With allow_partial, a path that would fail instead matches the deepest
    node with a handler seen along the way; the unconsumed segments are
    kept in Match.remaining.
    """
    segments = tokenizer(path)

    current = tree
    values: list[str] = []
    last: tuple[Node[T], int, int] | None = None  # (node, len(values), index)
    for i, seg in enumerate(segments):
        if allow_partial and current.handler is not None:
            last = (current, len(values), i)
        child = current.children.get(seg)
        if child is not None:  # literal match
            current = child
            continue
        if current.wildcard:  # consume the rest
            values.extend(segments[i:])
            break
        if current.variable is not None:  # fallback to variable match
            values.append(seg)
            current = current.variable
            continue
        # no match
        return _partial(last, values, segments)

    if current.handler is None:
        return _partial(last, values, segments)
    return Match(current, tuple(values))


def _partial(
    last: tuple[Node[T], int, int] | None,
    values: list[str],
    segments: Sequence[str],
) -> Match[T] | None:
    if last is None:
        return None
    node, n_values, index = last
    return Match(node, tuple(values[:n_values]), remaining=tuple(segments[index:]))


def iter_nodes(tree: Node[T]) -> Iterator[Node[T]]:
    """Yield every node in the tree, depth first."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(node.children.values())
        if node.variable is not None:
            stack.append(node.variable)


def handlers(tree: Node[T]) -> set[T]:
    """All handlers in the tree. Handlers must be hashable."""
    return {node.handler for node in iter_nodes(tree) if node.handler is not None}


def format_handlers(root: Node[T], *, tree: bool = False) -> str:
    """Format registered handlers as a human-readable string.

    By default produces a column-aligned list sorted by template:

        /                            home
        /date/:year/:month/:day      date
        /date/:year/:day/:month/US   us_date
        /seo/*                       seo

    With `tree=True`, produces a visual tree instead:

        / [home]
        ├── date
        │   └── :year
        │       └── :day
        │           └── :month [date]
        │               └── US [us_date]
        └── seo/* [seo]

    Variable edges are labelled with the last name registered for them.
    """
    if tree:
        return _format_tree(root)
    return _format_list(root)


def _format_list(root: Node[T]) -> str:
    """Column-aligned flat template list."""
    entries = sorted(
        (node.template or "/", _qualname(node.handler))
        for node in iter_nodes(root)
        if node.handler is not None
    )
    if not entries:
        return ""
    template_w = max(len(t) for t, _ in entries)
    return "\n".join(f"{t:<{template_w}}   {h}" for t, h in entries)


def _format_tree(root: Node[T]) -> str:
    """Visual tree with box-drawing characters."""
    root_label = "/"
    if root.wildcard:
        root_label += WILDCARD
    if root.handler is not None:
        root_label += f" [{_qualname(root.handler)}]"
    lines: list[str] = [root_label]
    _render_tree(root, "", lines=lines)
    return "\n".join(lines)


def _render_tree(node: Node[T], prefix: str, *, lines: list[str]) -> None:
    """Recursively render a node's children with tree-drawing prefixes."""
    items: list[tuple[str, Node[T]]] = [
        (seg, child) for seg, child in sorted(node.children.items())
    ]
    if node.variable is not None:
        items.append((f"{VARIABLE_PREFIX}{node.variable_name}", node.variable))

    for i, (seg, child) in enumerate(items):
        is_last = i == len(items) - 1
        connector = "└── " if is_last else "├── "
        label = seg
        if child.wildcard:
            label += f"/{WILDCARD}"
        if child.handler is not None:
            label += f" [{_qualname(child.handler)}]"
        lines.append(f"{prefix}{connector}{label}")
        extension = "    " if is_last else "│   "
        _render_tree(child, prefix + extension, lines=lines)


def _qualname(obj: object) -> str:
    """Extract __qualname__ from a callable, falling back to repr."""
    return str(obj.__qualname__) if hasattr(obj, "__qualname__") else repr(obj)
