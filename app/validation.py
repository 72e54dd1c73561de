from app.errors import InvalidPassageError


def clean_passage(text: str) -> str:
    """Fold line breaks into spaces and strip; reject empty or non-printable passages."""
    if not isinstance(text, str):
        raise InvalidPassageError(f"Passage must be a string, got {type(text).__name__}")
    cleaned = " ".join(line.strip() for line in text.splitlines()).strip()
    if not cleaned:
        raise InvalidPassageError("Passage is empty")
    bad = [ch for ch in cleaned if not ch.isprintable()]
    if bad:
        raise InvalidPassageError(f"Passage contains non-printable characters: {bad[:3]!r}")
    return cleaned
