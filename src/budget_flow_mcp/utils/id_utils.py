"""
Node id generation.
"""

from datetime import datetime
from typing import Iterable


def generate_node_id(existing: Iterable[str] = ()) -> str:
    """
    Generate a node id that does not collide with existing ids.

    Ids are millisecond timestamps. When the timestamp is already taken
    (several nodes added within the same millisecond) it is incremented
    until free.

    Args:
        existing: Ids already in use

    Returns:
        A fresh node id
    """
    taken = set(existing)
    candidate = int(datetime.now().timestamp() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)
