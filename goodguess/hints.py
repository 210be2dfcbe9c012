"""
Hint generation.

Hints are advisory text about the target word. Words with a semantic entry get
related-term, property or first-letter hints; everything else gets length and
letter-position hints. Hints never influence scoring.
"""

import re
import random
import logging
from typing import Iterable, List, Optional

from .config import DEFAULT_HINT_ATTEMPTS
from .semantic_data import SemanticEntry, get_semantic_entry

logger = logging.getLogger(__name__)

PROPERTY_PHRASES = {
    "species": "It's a type of {v}.",
    "country": "It's from {v}.",
    "ingredients": "It contains {v}.",
    "habitat": "It can be found in the {v}.",
    "region": "It's located in {v}.",
    "language": "People there speak {v}.",
    "type": "It's a {v}.",
    "equipment": "It involves {v}.",
    "genre": "It's a {v} movie.",
    "director": "It was directed by {v}.",
    "features": "It's known for {v}.",
}
DEFAULT_PROPERTY_PHRASE = "Its {property} is {v}."

# Proper names read better capitalized
TITLE_CASE_PROPERTIES = {"director", "region", "language"}

HINT_SHAPES = ("related", "property", "first_letter")


def ordinal(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th')
    return f"{n}{suffix}"


def _reveals_target(hint: str, target: str) -> bool:
    return bool(re.search(rf"\b{re.escape(target)}\b", hint, re.IGNORECASE))


def _related_hint(entry: SemanticEntry, rng) -> Optional[str]:
    if not entry.related:
        return None
    return f"It's related to {rng.choice(entry.related)}."


def _property_hint(entry: SemanticEntry, rng) -> Optional[str]:
    if not entry.properties:
        return None
    prop = rng.choice(sorted(entry.properties))
    value = rng.choice(entry.properties[prop])
    if prop in TITLE_CASE_PROPERTIES:
        value = value.title()
    template = PROPERTY_PHRASES.get(prop, DEFAULT_PROPERTY_PHRASE)
    return template.format(v=value, property=prop)


def _first_letter_hint(target: str) -> str:
    return f"It starts with the letter '{target[0].upper()}'."


def _fallback_candidates(target: str) -> List[str]:
    length = len(target.replace(' ', ''))
    candidates = []
    # Second letter onwards first, the first letter last
    positions = list(range(1, len(target))) + [0]
    for position in positions:
        letter = target[position]
        if letter == ' ':
            continue
        candidates.append(
            f"The word has {length} letters, and the {ordinal(position + 1)} letter is \"{letter}\"."
        )
    return candidates


def generate_fallback_hint(target_word: str, prior_hints: Iterable[str] = ()) -> str:
    """
    Length or letter-position hint, independent of any knowledge table.

    Deterministic: returns the first letter-position hint not in
    `prior_hints`, or the plain length hint once every letter has been shown.
    """
    target = str(target_word).strip().lower()
    if not target:
        return "The word is being prepared."
    prior = set(prior_hints or ())
    for hint in _fallback_candidates(target):
        if hint not in prior:
            return hint
    return f"The word has {len(target.replace(' ', ''))} letters."


def generate_hint(target_word: str, category_id: str, prior_hints: Iterable[str] = (),
                  rng: Optional[random.Random] = None,
                  attempts: int = DEFAULT_HINT_ATTEMPTS) -> str:
    """
    Produce a clue about the target that has not been shown yet.

    Tries up to `attempts` random semantic hints before falling back to a
    letter-position hint.
    """
    rng = rng or random
    target = str(target_word).strip().lower()
    prior = set(prior_hints or ())
    entry = get_semantic_entry(category_id, target)
    if entry is None:
        logger.info(f"[HINT] No semantic entry in '{category_id}'; using letter hints")
        return generate_fallback_hint(target, prior)

    for _ in range(attempts):
        shape = rng.choice(HINT_SHAPES)
        if shape == "related":
            hint = _related_hint(entry, rng)
        elif shape == "property":
            hint = _property_hint(entry, rng)
        else:
            hint = _first_letter_hint(target)
        if not hint or hint in prior or _reveals_target(hint, target):
            continue
        return hint

    logger.info(f"[HINT] No new semantic hint after {attempts} attempts; using letter hints")
    return generate_fallback_hint(target, prior)
