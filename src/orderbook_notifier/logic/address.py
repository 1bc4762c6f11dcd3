from typing import Optional

from orderbook_notifier.constants import ZERO_ADDRESS


def has_exclusive_filler(filler: Optional[str]) -> bool:
    """
    Check if the given filler address represents an exclusive filler.

    An exclusive filler is any address other than the zero address.

    Args:
        filler: The filler address to check

    Returns:
        True if the filler is exclusive, False otherwise
    """
    return bool(filler) and filler.lower() != ZERO_ADDRESS.lower()
