class StoryScorerError(Exception):
    """Base error for the caller-side layers (history, batch input, CLI)."""


class HistoryError(StoryScorerError):
    """History file could not be read or written."""


class InputFileError(StoryScorerError):
    """Batch input file is missing or malformed."""
