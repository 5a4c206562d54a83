"""
Savings path parsing.

Paths are tuples of node ids from the savings root. Outside callers may
pass dot-separated strings instead, either plain (``"etf.s&p500"``) or
with explicit sub-category hops (``"etf.subCategories.s&p500"``).
"""

from typing import Sequence, Tuple, Union

SUBCATEGORIES_SEGMENT = "subCategories"

PathLike = Union[str, Sequence[str]]


def parse_path(path: PathLike) -> Tuple[str, ...]:
    """
    Normalize a savings path to a tuple of node ids.

    Strings are split on dots, dropping empty and ``subCategories``
    segments. Sequences are taken as-is.
    """
    if isinstance(path, str):
        return tuple(
            segment
            for segment in path.split(".")
            if segment and segment != SUBCATEGORIES_SEGMENT
        )
    return tuple(path)


def format_path(path: Sequence[str]) -> str:
    """Encode a path as a dot-separated string."""
    return ".".join(path)
