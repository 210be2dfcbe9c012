"""Syntactic checks for guesses. Never raises, never calls out."""

import re

from .categories import ALL_GAME_WORDS
from .config import DEFAULT_MAX_WORD_LENGTH

# Real words and common abbreviations shorter than three letters
SHORT_WORDS = frozenset({
    'a', 'i',
    'ad', 'ah', 'am', 'an', 'as', 'at', 'aw', 'ax', 'ay', 'be', 'by', 'do', 'eh', 'ex',
    'go', 'ha', 'he', 'hi', 'ho', 'id', 'if', 'in', 'is', 'it', 'la', 'lo', 'ma', 'me',
    'my', 'no', 'of', 'oh', 'ok', 'on', 'or', 'ow', 'ox', 'pa', 'pi', 're', 'so', 'to',
    'uh', 'um', 'up', 'us', 'we', 'ya', 'ye', 'yo', 'bo', 'em', 'er', 'hm', 'mu', 'nu',
    'oi', 'xi',
    'ai', 'ar', 'cd', 'dc', 'dj', 'dr', 'eu', 'fm', 'gp', 'hq', 'hr', 'iq', 'mc', 'mp',
    'mr', 'ms', 'nz', 'pc', 'pm', 'pr', 'ps', 'tv', 'uk', 'un', 'vr', 'vs', 'ev', 'ip',
})

# Keyboard mashes and filler that are never accepted
NON_WORDS = frozenset({
    'asd', 'qwe', 'zxc', 'asdf', 'qwer', 'wasd', 'zxcv', 'qwerty', 'asdfgh', 'hjkl',
    'jkl', 'sdf', 'dfg', 'fgh', 'ghj', 'xcv', 'cvb', 'vbn', 'bnm',
})

KEYBOARD_ROWS = ('qwertyuiop', 'asdfghjkl', 'zxcvbnm')

_SEGMENT_RE = re.compile(r'^[a-z]+$')
_REPEAT_RE = re.compile(r'(.)\1{2,}')
_CONSONANT_RUN_RE = re.compile(r'[bcdfghjklmnpqrstvwxz]{6,}')


def normalize_word(text) -> str:
    """Trim, lowercase and collapse inner whitespace."""
    if text is None:
        return ''
    return ' '.join(str(text).strip().lower().split())


def _is_keyboard_run(segment: str) -> bool:
    if len(segment) < 4:
        return False
    for row in KEYBOARD_ROWS:
        if segment in row or segment in row[::-1]:
            return True
    return False


def _is_valid_segment(segment: str) -> bool:
    if not _SEGMENT_RE.match(segment):
        return False
    if len(segment) < 3 and segment not in SHORT_WORDS:
        return False
    if segment in NON_WORDS:
        return False
    if _REPEAT_RE.search(segment):
        return False
    if _is_keyboard_run(segment):
        return False
    if _CONSONANT_RUN_RE.search(segment):
        return False
    return True


def is_valid_word(text, max_length: int = DEFAULT_MAX_WORD_LENGTH) -> bool:
    """
    Check whether the input looks like a real word or phrase.

    Multi-word answers ("new york") are checked segment by segment. This is a
    syntactic gate only; it does not consult a dictionary.
    """
    if not isinstance(text, str):
        return False
    normalized = normalize_word(text)
    if not normalized:
        return False
    if len(normalized) > max_length:
        return False
    return all(_is_valid_segment(segment) for segment in normalized.split(' '))


def is_known_game_word(text) -> bool:
    """True if the input is a target word of any category."""
    if not isinstance(text, str):
        return False
    return normalize_word(text) in ALL_GAME_WORDS


def is_acceptable_guess(text, max_length: int = DEFAULT_MAX_WORD_LENGTH) -> bool:
    """Known game words are accepted outright; anything else must pass is_valid_word."""
    return is_known_game_word(text) or is_valid_word(text, max_length)
