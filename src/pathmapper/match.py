"""Lookup result."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from pathmapper.tree import Node

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Match(Generic[T]):
    """Result of a successful lookup.

    Holds the terminal node and the captured segment values. `handler`,
    `variables` and `template` are read through the node, so re-registering
    the same template after the lookup is visible here.
    """

    node: Node[T]
    values: tuple[str, ...] = field(default=())
    remaining: tuple[str, ...] = field(default=())  # set by partial lookups only

    @property
    def handler(self) -> T:
        return self.node.handler  # ty: ignore[invalid-return-type]  - only matched when set

    @property
    def variables(self) -> dict[str, str]:
        """Named captures, in template order.

        Wildcard captures follow the named ones in `values` and are not
        included here.
        """
        names = self.node.variable_names
        return dict(zip(names, self.values[: len(names)], strict=False))

    @property
    def template(self) -> str:
        """The registered template that produced this match, e.g. "/user/:id"."""
        return self.node.template or "/"
