from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple

RANKS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
SUITS = ("hearts", "diamonds", "clubs", "spades")
DECK_SIZE = len(RANKS) * len(SUITS)

CARD_IMAGE_DIR = "/images/cards"
CARD_BACK_IMAGE = f"{CARD_IMAGE_DIR}/back.svg"


@dataclass(frozen=True)
class Card:
    suit: str
    rank: str
    # Presentation only; two cards with the same suit and rank are the same card.
    face_up: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def code(self) -> str:
        return f"{self.rank}{self.suit[0]}"

    def turned(self, face_up: bool) -> "Card":
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)


def create_deck(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> Tuple[Card, ...]:
    deck = tuple(Card(suit, rank) for suit in SUITS for rank in RANKS)
    return shuffle_deck(deck, rng if rng is not None else random.Random(seed))


def shuffle_deck(deck: Sequence[Card], rng: Optional[random.Random] = None) -> Tuple[Card, ...]:
    """Return a Fisher-Yates permutation of ``deck``; the input is left alone."""
    rng = rng or random.Random()
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return tuple(shuffled)


def card_code(card: Card) -> str:
    return card.code


def card_image(card: Card) -> str:
    if not card.face_up:
        return CARD_BACK_IMAGE
    return f"{CARD_IMAGE_DIR}/{card.code}.svg"


def parse_code(code: str) -> Card:
    if len(code) < 2:
        raise ValueError(f"Invalid card code: {code}")
    rank, suit_letter = code[:-1], code[-1]
    for suit in SUITS:
        if suit[0] == suit_letter:
            return Card(suit, rank, face_up=True)
    raise ValueError(f"Invalid card code: {code}")
