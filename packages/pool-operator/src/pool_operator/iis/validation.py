"""Validation for IIS application pool names passed to appcmd.

appcmd parses arguments beginning with '/' as switches, and IIS rejects
pool names containing quotes or control characters, so such names are
refused before a process is spawned.
"""

# Characters IIS does not accept in application pool names
INVALID_POOL_CHARS = set('"|<>*?')


def validate_app_pool_name(name: str) -> None:
    """
    Validate an application pool name.

    Args:
        name: Pool name as read from the target source

    Raises:
        ValueError: If the name is blank, looks like an appcmd switch, or
            contains characters IIS refuses
    """
    if not name or not name.strip():
        raise ValueError("Invalid app pool name: blank")
    if name.startswith("/"):
        raise ValueError(f"Invalid app pool name '{name}': starts with '/'")
    bad = sorted(c for c in set(name) if c in INVALID_POOL_CHARS or ord(c) < 32)
    if bad:
        raise ValueError(
            f"Invalid app pool name '{name}': contains {', '.join(repr(c) for c in bad)}"
        )
