"""Saved content rules and the trailing-number increment.

A *rule* is a plain content template such as ``EXEM-5601350S000000000010``.
Rules are unique by exact string equality and kept in insertion order,
which is also the order shown in the dropdown.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator

# Longest run of ASCII digits anchored at the end of the text.
TRAILING_NUMBER_PATTERN = re.compile(r"(.*?)([0-9]+)", re.DOTALL)

# Trailing numbers are parsed as signed 64-bit values.
MAX_TRAILING_NUMBER = 2**63 - 1


def increment_trailing_number(text: str) -> str:
    """Return *text* with its trailing digit run incremented by one.

    The new number is zero-padded to the original run width, so
    ``"EXEM-0009"`` becomes ``"EXEM-0010"`` while ``"EXEM-999"`` grows to
    ``"EXEM-1000"``.  Text without trailing digits is returned unchanged,
    as is text whose number would leave the 64-bit range.
    """
    match = TRAILING_NUMBER_PATTERN.fullmatch(text or "")
    if match is None:
        return text
    prefix, number_str = match.group(1), match.group(2)
    number = int(number_str)
    if number >= MAX_TRAILING_NUMBER:
        logging.warning(
            "Trailing number %s cannot be incremented past %d; text left unchanged",
            number_str,
            MAX_TRAILING_NUMBER,
        )
        return text
    return prefix + str(number + 1).zfill(len(number_str))


class RuleStore:
    """Ordered collection of unique rules."""

    def __init__(self, rules: Iterable[str] | None = None) -> None:
        self._rules: list[str] = []
        for rule in rules or ():
            self.add(rule)

    def add(self, rule: str) -> bool:
        """Append *rule*; empty or already stored rules are ignored.

        Returns True when the store changed.
        """
        if not rule or rule in self._rules:
            return False
        self._rules.append(rule)
        return True

    def remove(self, rule: str) -> bool:
        """Remove *rule* if stored. Returns True when the store changed."""
        if rule not in self._rules:
            return False
        self._rules.remove(rule)
        return True

    def contains(self, rule: str) -> bool:
        return rule in self._rules

    def first(self) -> str:
        """Return the first stored rule, or an empty string when empty."""
        return self._rules[0] if self._rules else ""

    def to_list(self) -> list[str]:
        return list(self._rules)

    def __contains__(self, rule: object) -> bool:
        return rule in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._rules))

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleStore({self._rules!r})"


__all__ = ["RuleStore", "increment_trailing_number", "MAX_TRAILING_NUMBER"]
