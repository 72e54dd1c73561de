import logging
from pathlib import Path
from typing import List

from app import config
from app.errors import InvalidPassageError
from app.validation import clean_passage

log = logging.getLogger(__name__)

SAMPLE_PASSAGES = [
    "The quick brown fox jumps over the lazy dog.",
    "Pack my box with five dozen liquor jugs.",
    "How vexingly quick daft zebras jump!",
    "The five boxing wizards jump quickly.",
    "Sphinx of black quartz, judge my vow.",
]


def _load_blocks(path: Path) -> List[str]:
    txt = path.read_text(encoding="utf-8").replace("\r\n", "\n")
    return [b.strip() for b in txt.split("\n\n") if b.strip()]


def load_passages(path: Path = None) -> List[str]:
    """
    Passages from a blank-line separated text file, if present and usable.
    Falls back to the built-in pangrams; invalid blocks are skipped.
    """
    path = Path(path) if path is not None else config.PASSAGES_FILE
    if not path.exists():
        return list(SAMPLE_PASSAGES)
    try:
        blocks = _load_blocks(path)
    except (OSError, UnicodeDecodeError) as e:
        log.warning("Failed to read passages from %s: %s", path, e)
        return list(SAMPLE_PASSAGES)

    passages = []
    for i, block in enumerate(blocks):
        try:
            passages.append(clean_passage(block))
        except InvalidPassageError as e:
            log.warning("Skipping passage %d in %s: %s", i + 1, path, e)
    if not passages:
        log.warning("No usable passages in %s, using built-in samples", path)
        return list(SAMPLE_PASSAGES)
    return passages
