import random

import pytest

from goodguess.categories import (
    ALL_GAME_WORDS,
    CATEGORY_WORDS,
    get_categories,
    get_category,
    get_word_list,
    pick_target_word,
)
from goodguess.errors import UnknownCategoryError


@pytest.mark.unit
def test_categories_in_display_order():
    ids = [category.id for category in get_categories()]
    assert ids == ["animals", "food", "countries", "sports", "movies", "celebrities", "technology",
                   "italianbrainrot", "nature", "vehicles", "professions", "fruits"]
    assert set(ids) == set(CATEGORY_WORDS)


@pytest.mark.unit
def test_get_category():
    category = get_category(" ANIMALS ")
    assert category.id == "animals"
    assert category.display_name == "Animals"
    with pytest.raises(UnknownCategoryError) as exc_info:
        get_category("dinosaurs")
    assert "dinosaurs" in str(exc_info.value)


@pytest.mark.unit
def test_word_lists_are_clean():
    for category_id, words in CATEGORY_WORDS.items():
        assert len(words) == len(set(words)), category_id
        assert all(word == word.strip().lower() for word in words)
    assert "tiger" in ALL_GAME_WORDS
    assert get_word_list("dinosaurs") == []


@pytest.mark.unit
def test_get_word_list_returns_a_copy():
    words = get_word_list("animals")
    words.append("dragon")
    assert "dragon" not in get_word_list("animals")


@pytest.mark.unit
def test_pick_target_word():
    rng = random.Random(0)
    words = get_word_list("sports")
    for _ in range(20):
        assert pick_target_word("sports", rng=rng) in words
    only_one_left = words[1:]
    assert pick_target_word("sports", exclude=only_one_left, rng=rng) == words[0]
    # everything excluded widens back to the whole list
    assert pick_target_word("sports", exclude=words, rng=rng) in words
    with pytest.raises(UnknownCategoryError):
        pick_target_word("dinosaurs")
