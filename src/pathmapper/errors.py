class NoMatch(LookupError):
    """Raised by `PathMapper.match` when no template matches the path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No template matches {path!r}")
