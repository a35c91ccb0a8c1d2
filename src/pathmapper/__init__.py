from importlib.metadata import version

from .errors import NoMatch
from .mapper import Lookup, Middleware, PathMapper
from .match import Match

__all__ = [
    "Lookup",
    "Match",
    "Middleware",
    "NoMatch",
    "PathMapper",
    "__version__",
]

__version__ = version("pathmapper")
