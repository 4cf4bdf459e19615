# src/contentops/diff/config.py

from dataclasses import dataclass

DEFAULT_CHANGE_THRESHOLD = 20


@dataclass(frozen=True)
class DiffConfig:
    """Configuration for the diff engine.

    threshold: a proseable block is only reported as changed when its
    normalized text is strictly longer than this many characters.
    """

    threshold: int = DEFAULT_CHANGE_THRESHOLD
