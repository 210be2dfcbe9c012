import json
import re
import time
import random
from typing import Optional

import requests

from .config import DEFAULT_OPENROUTER_MODEL, OPENROUTER_URL
from .errors import RemoteScorerUnavailable
from .monitoring import logger
from .proximity import LocalScorer, Scorer
from .word_validation import normalize_word


SYSTEM_PROMPT = (
    "You are an AI that evaluates semantic similarity between words in a word-guessing game. "
    "You will be given two words and their category. "
    "Return a similarity score from 0 to 100, where 100 means they are identical and 0 means "
    "they have absolutely nothing in common. Scores in between reflect the semantic relationship "
    "in the given category, shared characteristics or properties, and cultural or conceptual connections. "
    'Respond with ONLY a JSON object with a single field "proximity": the similarity score. '
    "Do not include explanations or any text besides the JSON."
)


def parse_proximity(content: str) -> int:
    """
    Extract a proximity value from a model reply.

    Accepts a JSON object with a "proximity" field, or falls back to the first
    1-3 digit number in the text.
    """
    content = (content or '').strip()
    value = None
    json_match = re.search(r'\{.*\}', content, re.DOTALL)
    if json_match:
        try:
            value = json.loads(json_match.group(0)).get('proximity')
        except (ValueError, AttributeError):
            value = None
    if value is None:
        number_match = re.search(r'\b(\d{1,3})\b', content)
        value = int(number_match.group(1)) if number_match else None
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise RemoteScorerUnavailable(f"Unparseable proximity in reply: {content[:80]!r}")
    return max(0, min(100, int(round(value))))


class RemoteScorer(Scorer):
    """
    Best-effort AI scorer with a local fallback.

    Any failure of the remote call (missing key, timeout, HTTP error, quota,
    unparseable reply) is logged and answered by the fallback scorer.
    """

    name = "remote"

    def __init__(self, api_key: Optional[str], model: str = DEFAULT_OPENROUTER_MODEL,
                 url: str = OPENROUTER_URL, timeout: float = 3.0, max_attempts: int = 2,
                 fallback: Optional[Scorer] = None):
        self.api_key = api_key
        self.model = model
        self.url = url
        self.timeout = timeout
        self.max_attempts = max(1, int(max_attempts))
        self.fallback = fallback or LocalScorer()
        self.quota_exhausted = False
        self.headers = {
            "Authorization": f"Bearer {api_key}" if api_key else "",
            "Content-Type": "application/json",
            "X-Title": "GoodGuess",
            "Accept": "application/json",
        }

    def _build_messages(self, guess: str, target: str, category_id: str) -> list:
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": (
                    f'Compare these two {category_id} words: "{guess}" and "{target}". '
                    "How similar are they on a scale from 0-100?"
                ),
            },
        ]

    def _check_quota(self, response) -> None:
        remaining = response.headers.get('x-ratelimit-remaining')
        if remaining is None:
            return
        try:
            self.quota_exhausted = int(remaining) <= 0
        except (TypeError, ValueError):
            return
        if self.quota_exhausted:
            logger.error("[REMOTE] Quota exhausted. Switching to local scoring.")

    def request_proximity(self, guess: str, target: str, category_id: str) -> int:
        """Ask the remote model for a proximity score, raising RemoteScorerUnavailable on failure."""
        if not self.api_key:
            raise RemoteScorerUnavailable("No API key configured")
        if self.quota_exhausted:
            raise RemoteScorerUnavailable("Remote quota exhausted")

        payload = {
            "model": self.model,
            "messages": self._build_messages(guess, target, category_id),
            "temperature": 0.3,
            "max_tokens": 150,
        }
        last_error = None
        for attempt in range(self.max_attempts):
            try:
                response = requests.post(self.url, json=payload, headers=self.headers, timeout=self.timeout)
                self._check_quota(response)
                response.raise_for_status()
                data = response.json()
                content = data["choices"][0]["message"]["content"]
                return parse_proximity(content)
            except RemoteScorerUnavailable:
                raise
            except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as e:
                last_error = e
                logger.warning(f"[REMOTE] Request failed (attempt {attempt + 1}/{self.max_attempts}): {e}")
                if attempt + 1 < self.max_attempts and not self.quota_exhausted:
                    time.sleep(min(2.0, 0.5 * (2 ** attempt)) + random.uniform(0, 0.25))
                elif self.quota_exhausted:
                    break
        raise RemoteScorerUnavailable(f"Remote scoring failed: {last_error}")

    def score(self, guess: str, target: str, category_id: str) -> int:
        guess_n = normalize_word(guess)
        target_n = normalize_word(target)
        if guess_n == target_n:
            return 100
        try:
            proximity = self.request_proximity(guess_n, target_n, category_id)
        except RemoteScorerUnavailable as e:
            logger.warning(f"[REMOTE] {e}. Falling back to {self.fallback.name} scorer.")
            return self.fallback.score(guess_n, target_n, category_id)
        logger.info(f"[REMOTE] Scored {guess_n!r} against target in '{category_id}': {proximity}")
        return proximity
