"""Primary key generation.

Every table keys on a CUID2 string generated in Python, so ids are known
before a flush and entities can be built without a round trip.
"""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a fresh CUID2 string."""
    return str(_next_cuid())
