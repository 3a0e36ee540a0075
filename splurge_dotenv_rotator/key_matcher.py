"""Include/exclude key pattern matching.

Patterns use shell-style globbing (``*``, ``?``, ``[seq]``) and may contain
``{a,b}`` alternatives. Matching is case-sensitive.
"""

import fnmatch
import re
from typing import Iterable

from splurge_dotenv_rotator.exceptions import PatternError
from splurge_dotenv_rotator.validation_utils import normalize_key_list

_BRACES = re.compile(r"\{([^{}]*)\}")


class KeyMatcher:
    """Decides which env keys take part in a rotation."""

    def __init__(
        self,
        include: str | Iterable[str] | None = None,
        exclude: str | Iterable[str] | None = None
    ):
        """Compile include and exclude patterns.

        Args:
            include: Key patterns to rotate; empty means every key
            exclude: Key patterns never to rotate; wins over ``include``

        Raises:
            PatternError: If a pattern is invalid
        """
        self._include = normalize_key_list(include, error_cls=PatternError)
        self._exclude = normalize_key_list(exclude, error_cls=PatternError)
        self._include_regex = self._compile(self._include)
        self._exclude_regex = self._compile(self._exclude)

    @property
    def include(self) -> tuple[str, ...]:
        return self._include

    @property
    def exclude(self) -> tuple[str, ...]:
        return self._exclude

    def is_excluded(self, name: str) -> bool:
        """Return True if ``name`` matches an exclude pattern."""
        return self._matches(self._exclude_regex, name)

    def is_included(self, name: str) -> bool:
        """Return True if ``name`` matches an include pattern and no exclude pattern."""
        return self._matches(self._include_regex, name) and not self.is_excluded(name)

    def participates(self, name: str) -> bool:
        """Return True if the value of ``name`` should be rotated."""
        if self.is_excluded(name):
            return False
        return not self._include or self.is_included(name)

    @staticmethod
    def _matches(regexes: list[re.Pattern], name: str) -> bool:
        return any(regex.fullmatch(name) is not None for regex in regexes)

    @classmethod
    def _compile(cls, patterns: tuple[str, ...]) -> list[re.Pattern]:
        regexes = []
        for pattern in patterns:
            if not pattern:
                raise PatternError("Key pattern cannot be empty", pattern=pattern)
            for expanded in cls._expand_braces(pattern):
                try:
                    regexes.append(re.compile(fnmatch.translate(expanded)))
                except re.error as e:
                    raise PatternError(f"Invalid key pattern {pattern!r}: {e}", pattern=pattern) from e
        return regexes

    @classmethod
    def _expand_braces(cls, pattern: str) -> list[str]:
        match = _BRACES.search(pattern)
        if match is None:
            if "{" in pattern or "}" in pattern:
                raise PatternError(f"Unbalanced braces in key pattern: {pattern}", pattern=pattern)
            return [pattern]

        head, tail = pattern[:match.start()], pattern[match.end():]
        expanded = []
        for option in match.group(1).split(","):
            expanded.extend(cls._expand_braces(f"{head}{option}{tail}"))
        return expanded
