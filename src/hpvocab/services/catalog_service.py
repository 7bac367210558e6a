"""Service for loading the word catalog."""
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from hpvocab.config import settings
from hpvocab.models.word_models import WordEntry
from hpvocab.monitoring import catalog_fallbacks

logger = logging.getLogger(__name__)


def get_sample_words() -> List[WordEntry]:
    """Get the built-in catalog used when the catalog file cannot be loaded."""
    return [
        WordEntry(
            word="maskopi",
            part_of_speech="substantiv",
            correct_answer="hemligt samförstånd",
            options=(
                "hemligt samförstånd",
                "oväntat bakslag",
                "pinsamt misslyckande",
                "falsk identitet",
                "underjordisk rörelse",
            ),
            definition=(
                "Ett hemligt samarbete eller samförstånd mellan parter, "
                "ofta i syfte att lura eller bedra andra."
            ),
            etymology=(
                "Från italienska 'macchinazione' via franska. Relaterat till "
                "'maskin' - ursprungligen syftande på hemliga manövrer."
            ),
            difficulty=3,
            example_sentence="De misstänktes för maskopi med konkurrenten.",
        ),
        WordEntry(
            word="eterisk",
            part_of_speech="adjektiv",
            correct_answer="flyktig",
            options=("giftig", "flyktig", "explosiv", "frätande", "trögflytande"),
            definition=(
                "Som har att göra med eter; lätt och luftig; "
                "himmelsk eller andlig till sin natur."
            ),
            etymology="Från grekiska 'aither' (den rena övre luften) via latin 'aether'.",
            difficulty=3,
            example_sentence="Hennes eteriska skönhet fängslade alla närvarande.",
        ),
        WordEntry(
            word="perforera",
            part_of_speech="verb",
            correct_answer="göra hål i",
            options=("snygga till", "visa upp", "sätta fast", "vika ihop", "göra hål i"),
            definition="Att göra hål eller en serie hål i något.",
            etymology="Från latin 'perforare' (per = genom + forare = borra).",
            difficulty=2,
            example_sentence="Maskinen perforerar pappret längs kanten.",
        ),
    ]


def parse_catalog(data: Any) -> List[WordEntry]:
    """Convert a decoded JSON array into catalog entries.

    Raises TypeError, KeyError or ValueError if the data is malformed.
    Later duplicates of an identifier are dropped.
    """
    if not isinstance(data, list):
        raise TypeError(f"Catalog must be a JSON array, got {type(data).__name__}")

    words: List[WordEntry] = []
    seen = set()
    for item in data:
        if not isinstance(item, dict):
            raise TypeError(f"Catalog entry must be an object, got {type(item).__name__}")
        entry = WordEntry.from_dict(item)
        if entry.word in seen:
            logger.warning(f"Skipping duplicate catalog word {entry.word!r}")
            continue
        if entry.correct_answer not in entry.options:
            logger.warning(f"Correct answer of {entry.word!r} is missing from its options")
        seen.add(entry.word)
        words.append(entry)
    return words


def load_catalog(path: Optional[Path] = None) -> List[WordEntry]:
    """Load the catalog from a JSON file, falling back to the built-in words."""
    if path is None:
        path = settings.paths.catalog_file
    path = Path(path)

    try:
        with path.open(encoding="utf-8") as f:
            words = parse_catalog(json.load(f))
    except (OSError, json.JSONDecodeError, TypeError, KeyError, ValueError) as e:
        logger.error(f"Failed to load words from {path}: {e}")
        catalog_fallbacks.inc()
        return get_sample_words()

    logger.info(f"Loaded {len(words)} words")
    return words
