"""Path to handler mapper.

Usage::

    mapper = PathMapper(
        [
            ("/x/y/z", "XYZ"),
            ("/a/b/c", "ABC"),
            ("/date/:year/:month/:day", "Date"),
        ]
    )
    if (match := mapper.lookup("/date/2012/12/25")) is not None:
        match.handler  # "Date"
        match.variables  # {"year": "2012", "month": "12", "day": "25"}
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from functools import reduce
from typing import Generic, TypeVar

from pathmapper.errors import NoMatch
from pathmapper.match import Match
from pathmapper.tree import (
    Node,
    Tokenizer,
    add_handler,
    find_handler,
    format_handlers,
    handlers,
    tokenize,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Lookup = Callable[[str], Match[T] | None]
Middleware = Callable[[Lookup[T]], Lookup[T]]


class PathMapper(Generic[T]):
    """Maps path templates to handlers.

    Templates are slash-delimited; a segment starting with ":" is a named
    variable and a "*" segment matches everything after it. Empty segments,
    including those implied by leading or trailing slashes, are ignored, so
    "/a/:var/b", "a/:var/b/" and "//a//:var//b//" are the same template.

    Registration order has no bearing on lookup, except that a later
    registration of an identical template replaces the earlier one.

    Not thread safe for writes: register everything before concurrent
    lookups begin, or guard all calls with a single lock.
    """

    __slots__ = ("_allow_partial", "_lookup", "_middleware", "_tokenizer", "_tree")
    _tree: Node[T]
    _tokenizer: Tokenizer
    _allow_partial: bool
    _middleware: tuple[Middleware[T], ...]
    _lookup: Lookup[T]

    def __init__(
        self,
        pairs: Iterable[tuple[str, T]] = (),
        *,
        tokenizer: Tokenizer = tokenize,
        allow_partial: bool = False,
    ) -> None:
        self._tree = Node()
        self._tokenizer = tokenizer
        self._allow_partial = allow_partial
        self._middleware = ()
        self._lookup = self._find
        for template, handler in pairs:
            self.add_handler(template, handler)

    @classmethod
    def from_flat(
        cls,
        *args: str | T,
        tokenizer: Tokenizer = tokenize,
        allow_partial: bool = False,
    ) -> PathMapper[T]:
        """Build from a flat `template, handler, template, handler, ...` list."""
        if len(args) % 2:
            msg = f"expected template/handler pairs, got {len(args)} arguments"
            raise ValueError(msg)
        pairs = zip(args[::2], args[1::2], strict=True)
        return cls(
            pairs,  # ty: ignore[invalid-argument-type]
            tokenizer=tokenizer,
            allow_partial=allow_partial,
        )

    def add_handler(self, template: str, handler: T) -> None:
        """Registers handler at template, replacing any handler already there."""
        previous = add_handler(self._tree, template, handler, self._tokenizer)
        if previous is not None:
            logger.debug(
                "path_mapper.add_handler: %r replaced %r with %r",
                template,
                previous,
                handler,
            )
        else:
            logger.debug("path_mapper.add_handler: %r -> %r", template, handler)

    def lookup(self, path: str) -> Match[T] | None:
        """Returns the match for path, or None if no template matches."""
        return self._lookup(path)

    def match(self, path: str) -> Match[T]:
        """Like lookup, but raises NoMatch instead of returning None."""
        match = self._lookup(path)
        if match is None:
            raise NoMatch(path)
        return match

    def handlers(self) -> set[T]:
        """Returns the set of all registered handlers."""
        return handlers(self._tree)

    def use(self, *middleware: Middleware[T]) -> None:
        """Wraps lookup with middleware. The first registered runs outermost."""
        self._middleware += middleware
        self._lookup = reduce(
            lambda h, m: m(h), reversed(self._middleware), self._find
        )

    def format(self, *, tree: bool = False) -> str:
        """Human-readable listing of registered templates, see `format_handlers`."""
        return format_handlers(self._tree, tree=tree)

    def _find(self, path: str) -> Match[T] | None:
        return find_handler(
            self._tree,
            path,
            self._tokenizer,
            allow_partial=self._allow_partial,
        )
