"""Tests for word selection."""
import random
from unittest.mock import Mock

import pytest

from hpvocab.models.session_models import SelectionPool
from hpvocab.services.mastery_store import MasteryStore
from hpvocab.services.word_selector import RecencyBuffer, WordSelector


def scripted_rng(*draws: float) -> random.Random:
    """Create a random source whose pool draws are fixed."""
    rng = random.Random(7)
    rng.random = Mock(side_effect=list(draws))
    return rng


@pytest.fixture
def mastery() -> MasteryStore:
    """Create an empty mastery store."""
    return MasteryStore()


def test_recency_buffer_evicts_oldest() -> None:
    """Test FIFO eviction once capacity is exceeded."""
    recent = RecencyBuffer(capacity=3)
    for identifier in ["a", "b", "c", "d"]:
        recent.push(identifier)

    assert list(recent) == ["b", "c", "d"]
    assert "a" not in recent
    assert len(recent) == 3


def test_recency_buffer_default_capacity() -> None:
    """Test the default capacity of fifteen words."""
    assert RecencyBuffer().capacity == 15


def test_recency_buffer_rejects_zero_capacity() -> None:
    """Test that a buffer needs room for at least one word."""
    with pytest.raises(ValueError):
        RecencyBuffer(capacity=0)


def test_empty_catalog(mastery: MasteryStore) -> None:
    """Test that an empty catalog yields no word and keeps the buffer."""
    recent = RecencyBuffer()
    recent.push("maskopi")

    assert WordSelector().select_next([], mastery, recent) is None
    assert list(recent) == ["maskopi"]


def test_selected_word_is_recorded(catalog_factory, mastery: MasteryStore) -> None:
    """Test that the pick is appended to the recency buffer."""
    catalog = catalog_factory(60)
    recent = RecencyBuffer()

    word = WordSelector(rng=random.Random(3)).select_next(catalog, mastery, recent)

    assert word in catalog
    assert list(recent) == [word.word]


def test_no_repeat_within_buffer(catalog_factory, mastery: MasteryStore) -> None:
    """Test that a large catalog never repeats a word within fifteen picks."""
    catalog = catalog_factory(100)
    recent = RecencyBuffer()
    selector = WordSelector(rng=random.Random(11))

    picks = [selector.select_next(catalog, mastery, recent).word for _ in range(300)]

    for start in range(len(picks) - 15):
        window = picks[start:start + 16]
        assert len(set(window)) == 16


def test_buffer_reset_below_threshold(catalog_factory, mastery: MasteryStore) -> None:
    """Test that the buffer is cleared once fewer than fifty words remain."""
    catalog = catalog_factory(64)
    recent = RecencyBuffer()
    selector = WordSelector(rng=random.Random(5))

    for _ in range(15):
        selector.select_next(catalog, mastery, recent)
    assert len(recent) == 15

    selector.select_next(catalog, mastery, recent)
    assert len(recent) == 1


def test_small_catalog_never_starves(catalog_factory, mastery: MasteryStore) -> None:
    """Test that a ten-word catalog always yields a word."""
    catalog = catalog_factory(10)
    recent = RecencyBuffer()
    selector = WordSelector(rng=random.Random(9))

    for _ in range(200):
        word = selector.select_next(catalog, mastery, recent)
        assert word in catalog
        assert len(recent) == 1


def test_review_pool_selected(catalog_factory, mastery: MasteryStore) -> None:
    """Test that a low draw picks a word needing review."""
    catalog = catalog_factory(60)
    mastery.record_attempt("ord7", False)

    selector = WordSelector(rng=scripted_rng(0.1))
    word = selector.select_next(catalog, mastery, RecencyBuffer())

    assert word.word == "ord7"


def test_new_pool_selected(catalog_factory, mastery: MasteryStore) -> None:
    """Test that a middle draw picks an unattempted word."""
    catalog = catalog_factory(60)
    for entry in catalog[:55]:
        mastery.record_attempt(entry.word, True)

    selector = WordSelector(rng=scripted_rng(0.5))
    word = selector.select_next(catalog, mastery, RecencyBuffer())

    assert mastery.is_new(word.word)
    assert word in catalog[55:]


def test_empty_review_pool_falls_to_new(catalog_factory, mastery: MasteryStore) -> None:
    """Test that a review draw uses new words when nothing needs review."""
    catalog = catalog_factory(60)
    for entry in catalog[1:]:
        mastery.record_attempt(entry.word, True)

    selector = WordSelector(rng=scripted_rng(0.1))
    word = selector.select_next(catalog, mastery, RecencyBuffer())

    assert word.word == "ord0"


def test_high_draw_uses_any_word(catalog_factory, mastery: MasteryStore) -> None:
    """Test that a draw past both thresholds uses the whole available set."""
    catalog = catalog_factory(60)
    mastery.record_attempt("ord0", False)

    selector = WordSelector(rng=scripted_rng(0.9))
    pool, pool_type = selector._choose_pool(catalog, mastery)

    assert pool_type == SelectionPool.ANY
    assert pool == catalog


def test_empty_new_pool_short_circuits_to_any(catalog_factory, mastery: MasteryStore) -> None:
    """Test that a new-word draw with no new words uses any word, not review."""
    catalog = catalog_factory(60)
    mastery.record_attempt("ord0", False)
    for entry in catalog[1:]:
        mastery.record_attempt(entry.word, True)

    selector = WordSelector(rng=scripted_rng(0.5))
    pool, pool_type = selector._choose_pool(catalog, mastery)

    assert pool_type == SelectionPool.ANY
    assert len(pool) == 60


def test_new_words_never_in_review_pool(catalog_factory, mastery: MasteryStore) -> None:
    """Test that the review and new pools are disjoint."""
    catalog = catalog_factory(60)
    rng = random.Random(21)
    for entry in catalog[:40]:
        mastery.record_attempt(entry.word, rng.random() < 0.5)

    review = {entry.word for entry in catalog if mastery.needs_review(entry.word)}
    new = {entry.word for entry in catalog if mastery.is_new(entry.word)}

    assert review
    assert len(new) == 20
    assert not review & new


def test_mastered_catalog_always_yields(catalog_factory, mastery: MasteryStore) -> None:
    """Test that with empty review and new pools every draw still picks a word."""
    catalog = catalog_factory(60)
    for entry in catalog:
        mastery.record_attempt(entry.word, True)
        mastery.record_attempt(entry.word, True)

    recent = RecencyBuffer()
    selector = WordSelector(rng=random.Random(99))

    for _ in range(1000):
        word = selector.select_next(catalog, mastery, recent)
        assert word in catalog


def test_configured_thresholds() -> None:
    """Test that constructor arguments override settings."""
    selector = WordSelector(review_threshold=0.3, new_words_threshold=0.6, reset_threshold=5)

    assert selector.review_threshold == 0.3
    assert selector.new_words_threshold == 0.6
    assert selector.reset_threshold == 5


def test_default_thresholds() -> None:
    """Test the default thresholds from settings."""
    selector = WordSelector()

    assert selector.review_threshold == 0.2
    assert selector.new_words_threshold == 0.8
    assert selector.reset_threshold == 50


def test_zero_reset_threshold_rejected() -> None:
    """Test that a reset threshold below one is refused."""
    with pytest.raises(ValueError):
        WordSelector(reset_threshold=0)


def test_lowest_reset_threshold_never_starves(catalog_factory, mastery: MasteryStore) -> None:
    """Test that a threshold of one still clears an exhausted buffer."""
    catalog = catalog_factory(3)
    recent = RecencyBuffer()
    selector = WordSelector(rng=random.Random(4), reset_threshold=1)

    picks = [selector.select_next(catalog, mastery, recent) for _ in range(30)]

    assert all(word in catalog for word in picks)
    assert len({word.word for word in picks[:3]}) == 3
    assert len(recent) == 3
