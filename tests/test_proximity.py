import pytest
from unittest.mock import patch

from goodguess.config import Settings
from goodguess.proximity import (
    SCORING_PROFILES,
    LocalScorer,
    Scorer,
    lexical_similarity,
    make_scorer,
    semantic_bonus,
    semantic_similarity,
)
from goodguess.remote_scorer import RemoteScorer
from goodguess.semantic_data import SemanticEntry, get_semantic_entry, get_semantic_tables


@pytest.mark.unit
def test_lexical_identity():
    for word in ["tiger", "a", "new york", "hippopotamus", ""]:
        assert lexical_similarity(word, word) == 100
    assert lexical_similarity("TIGER", "tiger") == 100


@pytest.mark.unit
def test_lexical_tiger_lion():
    # one shared letter, no shared prefix or suffix, one letter longer
    assert lexical_similarity("tiger", "lion") == 15


@pytest.mark.unit
def test_lexical_prefix_and_length():
    # 3/4 letters shared, 3-letter prefix, first letter bonus
    assert lexical_similarity("cat", "cats") == 81


@pytest.mark.unit
def test_lexical_floor():
    # nothing in common still shows a bar
    assert lexical_similarity("xyz", "abcdefgh") == 5


@pytest.mark.unit
def test_lexical_anagram_can_reach_100():
    # clamped from 116
    assert lexical_similarity("listen", "lsiten") == 100
    assert lexical_similarity("listen", "silent") == 100
    assert lexical_similarity("tigers", "tiger") < 100


@pytest.mark.unit
def test_lexical_single_letter_against_long_word():
    # length penalty capped at 25, floored to 5, then first letter bonus
    assert lexical_similarity("a", "abcdefghijkl") == 10


@pytest.mark.unit
def test_lexical_prefix_and_length_caps():
    long_word = "abcdefghijklmnopqrst"
    short_word = "abcdefghijklmn"
    # 70 shared - 25 length cap + 20 prefix cap + 5 first letter
    assert lexical_similarity(long_word, short_word) == 70
    assert lexical_similarity(long_word, short_word, length_penalty_cap=30) == 65
    assert lexical_similarity("abcdefghijklm", "abcdefghijklmnopqrstuvwxyz") == 50


@pytest.mark.unit
def test_lexical_suffix_cap():
    # 8/13 shared + 15 suffix cap + 3 last letter = 79.5, rounded up
    assert lexical_similarity("mnopqabcdefgh", "vwxyzabcdefgh") == 80


@pytest.mark.unit
def test_lexical_symmetric():
    pairs = [("tiger", "lion"), ("pizza", "pasta"), ("france", "finland"), ("up", "cars")]
    for a, b in pairs:
        assert lexical_similarity(a, b) == lexical_similarity(b, a)


@pytest.mark.unit
def test_semantic_identity_for_every_entry():
    for category_id, table in get_semantic_tables().items():
        for word in table:
            assert semantic_similarity(word, word, category_id) == 100
            assert semantic_similarity(word.upper(), f"  {word} ", category_id) == 100


@pytest.mark.unit
def test_semantic_lion_tiger():
    base = lexical_similarity("lion", "tiger")
    score = semantic_similarity("lion", "tiger", "animals")
    # base 15 + related 15 + species 20 + features 20
    assert score == 70
    assert score - base >= 20


@pytest.mark.unit
def test_semantic_range_within_tables():
    for category_id, table in get_semantic_tables().items():
        words = list(table)
        for guess in words:
            for target in words:
                score = semantic_similarity(guess, target, category_id)
                assert 0 <= score <= 100


@pytest.mark.unit
def test_semantic_unknown_words_fall_back_to_lexical():
    assert semantic_similarity("blorp", "tiger", "animals") == max(lexical_similarity("blorp", "tiger"), 3)
    # category without a table
    assert semantic_similarity("laptop", "computer", "technology") == lexical_similarity("laptop", "computer")
    # unknown category never raises
    assert 0 <= semantic_similarity("cat", "dog", "nonexistent") <= 100


@pytest.mark.unit
def test_participation_bonus_applies_without_shared_related():
    base = lexical_similarity("zebra", "lion")
    assert semantic_similarity("zebra", "lion", "animals") >= base + 5


@pytest.mark.unit
def test_every_profile_has_a_table():
    tables = get_semantic_tables()
    assert set(SCORING_PROFILES) == set(tables)


@pytest.mark.unit
def test_local_scorer():
    scorer = LocalScorer()
    assert scorer.name == "local"
    assert scorer.score("lion", "tiger", "animals") == 70
    assert scorer.score("Tiger", "tiger", "animals") == 100


@pytest.mark.unit
def test_make_scorer_local_by_default():
    with patch.dict('os.environ', {'USE_REMOTE_SCORER': 'false'}):
        scorer = make_scorer(Settings())
    assert isinstance(scorer, LocalScorer)


@pytest.mark.unit
def test_make_scorer_remote_needs_key():
    scorer = make_scorer(Settings(use_remote_scorer=True, openrouter_api_key=None))
    assert isinstance(scorer, LocalScorer)

    scorer = make_scorer(Settings(use_remote_scorer=True, openrouter_api_key="test_key",
                                  length_penalty_cap=30))
    assert isinstance(scorer, RemoteScorer)
    assert isinstance(scorer.fallback, LocalScorer)
    assert scorer.fallback.length_penalty_cap == 30


def make_entry(name, related=(), **properties):
    return SemanticEntry(name, tuple(related), {key: tuple(values) for key, values in properties.items()})


@pytest.mark.unit
def test_primary_bonuses():
    food = SCORING_PROFILES["food"]
    guess = make_entry("risotto", country=["italy"], ingredients=["rice"])
    target = make_entry("pasta", country=["italy", "italian"], ingredients=["flour"])
    assert semantic_bonus(guess, target, food) == 25.0

    countries = SCORING_PROFILES["countries"]
    guess = make_entry("spain", region=["europe"], language=["spanish"])
    target = make_entry("france", region=["europe", "western europe"], language=["french"])
    assert semantic_bonus(guess, target, countries) == 30.0

    sports = SCORING_PROFILES["sports"]
    guess = make_entry("hockey", type=["team"], equipment=["stick"])
    target = make_entry("soccer", type=["team", "ball"], equipment=["ball"])
    assert semantic_bonus(guess, target, sports) == 30.0


@pytest.mark.unit
def test_movie_genre_and_director_are_flat():
    movies = SCORING_PROFILES["movies"]
    guess = make_entry("jaws", genre=["thriller"], director=["steven spielberg"])
    target = make_entry("duel", genre=["thriller", "action"], director=["steven spielberg", "someone"])
    # participation 5 + genre 25 + director 30
    assert semantic_bonus(guess, target, movies) == 60.0


@pytest.mark.unit
def test_ratio_bonus_is_capped():
    animals = SCORING_PROFILES["animals"]
    guess = make_entry("lion", related=["big cat"], habitat=["savanna"])
    target = make_entry("cheetah", related=["big cat"], habitat=["savanna"])
    # related 15 + habitat 100% capped to 20
    assert semantic_bonus(guess, target, animals) == 35.0

    target = make_entry("owl", habitat=["savanna", "forest", "desert", "jungle", "ocean",
                                        "arctic", "river", "mountain", "grassland", "swamp"])
    # participation 5 + one of ten habitats
    assert semantic_bonus(guess, target, animals) == pytest.approx(15.0)


@pytest.mark.unit
def test_semantic_avatar_titanic():
    avatar = get_semantic_entry("movies", "avatar")
    titanic = get_semantic_entry("movies", "titanic")
    # shared related 15 + same director 30, no genre or feature overlap
    assert semantic_bonus(avatar, titanic, SCORING_PROFILES["movies"]) == 45.0
    assert lexical_similarity("avatar", "titanic") == 24
    assert semantic_similarity("avatar", "titanic", "movies") == 69


@pytest.mark.unit
def test_semantic_bonus_can_reach_100():
    # 52 lexical + 50 bonus, clamped
    assert semantic_similarity("pizza", "pasta", "food") == 100


@pytest.mark.unit
def test_scorer_is_abstract():
    with pytest.raises(TypeError):
        Scorer()
