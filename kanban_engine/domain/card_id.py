"""Alphabetic card identifiers with spreadsheet-style sequencing.

Valid ids are ``A``..``Z``, ``AA``..``ZZ``, ``AAA``... Ids are totally
ordered by (length, lexicographic), so ``Z`` < ``AA``.
"""

from __future__ import annotations

import re
from typing import NewType, Optional, Tuple

CardId = NewType("CardId", str)

VALID_CARD_ID_PATTERN = re.compile(r"^[A-Z]+$")


def is_valid_card_id(value: object) -> bool:
    return isinstance(value, str) and bool(VALID_CARD_ID_PATTERN.fullmatch(value))


def parse_card_id(value: object) -> Optional[CardId]:
    """Return the value as a CardId, or None when it is not one."""
    if not is_valid_card_id(value):
        return None
    return CardId(value)


def next_card_id(current: CardId) -> CardId:
    """A -> B, Z -> AA, AZ -> BA, ZZ -> AAA"""
    chars = list(current)
    for i in range(len(chars) - 1, -1, -1):
        if chars[i] != "Z":
            chars[i] = chr(ord(chars[i]) + 1)
            return CardId("".join(chars))
        chars[i] = "A"
    return CardId("A" + "".join(chars))


def card_id_sort_key(card_id: str) -> Tuple[int, str]:
    return (len(card_id), card_id)
