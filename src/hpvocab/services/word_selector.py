"""Service for choosing the next word to drill."""
import logging
import random
from collections import deque
from typing import Deque, Iterator, List, Optional, Sequence, Tuple

from hpvocab.config import settings
from hpvocab.models.session_models import SelectionPool
from hpvocab.models.word_models import WordEntry
from hpvocab.monitoring import recency_resets, words_served
from hpvocab.services.mastery_store import MasteryStore

logger = logging.getLogger(__name__)


class RecencyBuffer:
    """Identifiers of the most recently shown words, oldest evicted first."""

    def __init__(self, capacity: Optional[int] = None):
        if capacity is None:
            capacity = settings.learning.recent_word_buffer
        if capacity < 1:
            raise ValueError("Recency buffer capacity must be positive")
        self.capacity = capacity
        self._items: Deque[str] = deque(maxlen=capacity)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def push(self, identifier: str) -> None:
        """Append an identifier, evicting the oldest one when full."""
        self._items.append(identifier)

    def clear(self) -> None:
        """Forget every shown word."""
        self._items.clear()


class WordSelector:
    """Picks words with a bias towards review and new words.

    Each pick draws one value from the random source: below the review
    threshold the review pool is used if non-empty, otherwise below the
    new-word threshold the new-word pool is used if non-empty, otherwise any
    word outside the recency buffer.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        review_threshold: Optional[float] = None,
        new_words_threshold: Optional[float] = None,
        reset_threshold: Optional[int] = None,
    ):
        """Initialize the selector with an optional random source."""
        learning = settings.learning
        self.rng = rng if rng is not None else random.Random()
        self.review_threshold = (
            learning.review_threshold if review_threshold is None else review_threshold
        )
        self.new_words_threshold = (
            learning.new_words_threshold if new_words_threshold is None else new_words_threshold
        )
        self.reset_threshold = (
            learning.buffer_reset_threshold if reset_threshold is None else reset_threshold
        )
        if self.reset_threshold < 1:
            raise ValueError("Reset threshold must be positive")

    def select_next(
        self,
        catalog: Sequence[WordEntry],
        mastery: MasteryStore,
        recent: RecencyBuffer,
    ) -> Optional[WordEntry]:
        """Choose the next word and remember it in the recency buffer.

        Returns None when the catalog is empty; the buffer is left untouched
        in that case.
        """
        if not catalog:
            logger.warning("No words available for selection")
            return None

        available = [entry for entry in catalog if entry.word not in recent]

        # Small catalogs reset on every call, which disables anti-repetition for them
        if len(available) < self.reset_threshold:
            logger.debug(
                f"Only {len(available)} words outside the recency buffer, clearing it"
            )
            recent.clear()
            recency_resets.inc()
            available = list(catalog)

        pool, pool_type = self._choose_pool(available, mastery)
        word = self.rng.choice(pool)

        recent.push(word.word)
        words_served.labels(pool=pool_type.value).inc()
        logger.debug(f"Selected {word.word!r} from {pool_type.value} pool of {len(pool)}")
        return word

    def _choose_pool(
        self, available: List[WordEntry], mastery: MasteryStore
    ) -> Tuple[List[WordEntry], SelectionPool]:
        """Choose the pool to draw from; never returns an empty pool."""
        review_pool = [entry for entry in available if mastery.needs_review(entry.word)]
        new_pool = [entry for entry in available if mastery.is_new(entry.word)]

        draw = self.rng.random()
        if review_pool and draw < self.review_threshold:
            pool, pool_type = review_pool, SelectionPool.REVIEW
        elif new_pool and draw < self.new_words_threshold:
            pool, pool_type = new_pool, SelectionPool.NEW
        else:
            pool, pool_type = available, SelectionPool.ANY

        if not pool:
            pool, pool_type = available, SelectionPool.ANY
        return pool, pool_type
