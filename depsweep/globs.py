"""minimatch-style glob matching shared by classification, production paths and ignores.

``*`` never crosses ``/``, ``**`` is a globstar, ``{a,b}`` braces expand and a
pattern has to cover the whole subject.
"""

from __future__ import annotations

from collections.abc import Iterable

from wcmatch import glob

_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB


def glob_match(subject: str, pattern: str | Iterable[str], *, dot: bool = False) -> bool:
    """True when *subject* matches *pattern* (or any of several patterns).

    Leading-dot segments only match wildcards when *dot* is set.
    """
    flags = _FLAGS | glob.DOTGLOB if dot else _FLAGS
    patterns = [pattern] if isinstance(pattern, str) else list(pattern)
    return glob.globmatch(subject, patterns, flags=flags)
