import re

_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_-]")
_VALID_START = re.compile(r"^[A-Za-z_]")


def sanitize_identifier(name: str) -> str:
    """Turn a user-facing node name into a configuration identifier.

    Every character outside ``[A-Za-z0-9_-]`` becomes ``_``; names that do not
    start with a letter or underscore get an ``r_`` prefix.

    Example:
        >>> sanitize_identifier("web server 1")
        'web_server_1'
        >>> sanitize_identifier("1st-vpc")
        'r_1st-vpc'
    """
    identifier = _INVALID_CHARS.sub("_", name or "")
    if not identifier or not _VALID_START.match(identifier):
        identifier = f"r_{identifier}"
    return identifier


def default_node_name(kind: str, index: int) -> str:
    """Editor-style default name: ``google_compute_network`` -> ``compute-network-<index>``."""
    label = kind.replace("google_", "", 1).replace("_", "-")
    return f"{label}-{index}"
