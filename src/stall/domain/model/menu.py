"""The stall's fixed menu: two item kinds, one price each."""

from __future__ import annotations

from enum import Enum

from stall.domain.exceptions import ValidationError
from stall.domain.model.value_objects import Money

TICKET_COUNT = 10


class ItemKind(Enum):
    APPLE = "apple"
    BANANA = "banana"

    @staticmethod
    def parse(text: str) -> ItemKind:
        """Resolve ``apple`` / ``APPLE`` / ``Banana`` etc. to a kind."""
        cleaned = (text or "").strip().lower()
        for kind in ItemKind:
            if cleaned in (kind.value, kind.name.lower()):
                return kind
        raise ValidationError(f"Unknown item: {text!r}")


_PRICES = {
    ItemKind.APPLE: Money.of(350),
    ItemKind.BANANA: Money.of(200),
}


def price_of(kind: ItemKind) -> Money:
    return _PRICES[kind]
