import re

_ID_PATTERN = re.compile(r"[0-9]+")

MAX_ID = 2**64 - 1


def parse_id(raw: str) -> int | None:
    """Parse an unsigned 64-bit path identifier, returning None when it is not one."""
    if not _ID_PATTERN.fullmatch(raw):
        return None
    value = int(raw)
    if value > MAX_ID:
        return None
    return value
