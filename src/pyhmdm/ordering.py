"""Deterministic ordering of the controls of a device."""

from __future__ import annotations

from functools import cmp_to_key
import unicodedata

from .models import Control, get_text


def _char_weight(char: str) -> int:
    # whitespace and punctuation sort before digits, digits before letters
    if char.isalpha():
        return 2
    if char.isdigit():
        return 1
    return 0


def collation_key(text: str) -> tuple:
    """Return a sort key that orders text the way a UI collator does.

    The first level ignores case and accents, the second level breaks ties
    on accents and the last one puts lower case before upper case.
    """
    decomposed = unicodedata.normalize("NFD", text)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return (
        tuple((_char_weight(char), char.casefold()) for char in base),
        decomposed.casefold(),
        tuple(char.isupper() for char in base),
        text,
    )


def _locale_compare(first: str, second: str) -> int:
    first_key = collation_key(first)
    second_key = collation_key(second)
    return (first_key > second_key) - (first_key < second_key)


def compare_controls(first: Control, second: Control, language: str) -> int:
    """Compare two controls by channel placement, then by id.

    Controls of the same channel (same name or same order) are ordered by
    id. Channels with a numeric order are ordered numerically. Channels
    without one compare as equal.
    """
    if first.channel and second.channel:
        first_name = get_text(first.channel.name, language)
        second_name = get_text(second.channel.name, language)
        first_order = first.channel.order
        second_order = second.channel.order

        if first_name == second_name or (
            first_order is not None and first_order == second_order
        ):
            return _locale_compare(first.id, second.id)
        if first_order is not None and second_order is not None:
            return first_order - second_order
        # Compares the second name against itself, so unordered channels tie
        return _locale_compare(second_name, second_name)

    return _locale_compare(first.id, second.id)


def sort_controls(controls: list[Control], language: str) -> list[Control]:
    """Return the controls sorted for display in the given language."""
    return sorted(
        controls,
        key=cmp_to_key(lambda first, second: compare_controls(first, second, language)),
    )
