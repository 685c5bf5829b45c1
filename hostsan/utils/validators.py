"""Input validation utilities for hostsan."""

import validators as v


def is_remote_source(source: str) -> bool:
    """True when a suffix-list source is an http(s) URL rather than a path."""
    if not source or not source.startswith(("http://", "https://")):
        return False
    # intranet and localhost list servers are allowed
    return v.url(source, simple_host=True) is True


def split_sources(sources: list[str]) -> tuple[list[str], list[str]]:
    """Split suffix-list sources into (remote, local) lists, order kept."""
    remote = [s for s in sources if is_remote_source(s)]
    local = [s for s in sources if not is_remote_source(s)]
    return remote, local
