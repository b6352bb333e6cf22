"""
Transcript persistence for stepcalc evaluations.

Handles writing, reading, listing and deleting saved evaluation transcripts
in the evaluations/ directory. A transcript is a plain text file with one
line per step:

    = (2 + 3) * 4
    = 5 * 4
    = 20
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .errors import TranscriptError

logger = logging.getLogger(__name__)

TRANSCRIPTS_DIR = "evaluations"
STEP_PREFIX = "= "


def get_transcript_path(name: str, directory: Path) -> Path:
    """Resolve a transcript name to a file path inside ``directory``.

    Args:
        name: Bare file name chosen by the user.
        directory: Transcripts directory.

    Returns:
        Path to the transcript file.

    Raises:
        TranscriptError: If the name is empty or tries to leave the directory.
    """
    name = name.strip()
    if not name:
        raise TranscriptError("Transcript name must not be empty")
    if any(c in name for c in ("/", "\\", "\x00")) or name in (".", ".."):
        raise TranscriptError(f"Invalid transcript name: {name!r}")
    return directory / name


def save_transcript(
    name: str,
    steps: Sequence[str],
    directory: Path = Path(TRANSCRIPTS_DIR),
) -> Path:
    """Write evaluation steps to ``directory/name``, one ``= step`` line each.

    An existing transcript with the same name is overwritten.

    Args:
        name: File name for the transcript.
        steps: Rendered steps, in order, as returned by
            ``Evaluator.get_evaluation_steps()``.
        directory: Transcripts directory (created if missing).

    Returns:
        Path to the written file.
    """
    path = get_transcript_path(name, directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            for step in steps:
                f.write(f"{STEP_PREFIX}{step}\n")
    except OSError as e:
        raise TranscriptError(f"Failed to save transcript {name!r}: {e}") from e

    logger.info("Saved %d steps to %s", len(steps), path)
    return path


def load_transcript(name: str, directory: Path = Path(TRANSCRIPTS_DIR)) -> list[str]:
    """Read a saved transcript back into its list of steps.

    Raises:
        TranscriptError: If the transcript does not exist or cannot be read.
    """
    path = get_transcript_path(name, directory)
    if not path.is_file():
        raise TranscriptError(f"No saved evaluation named {name!r}")

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise TranscriptError(f"Failed to read transcript {name!r}: {e}") from e
    return [line.removeprefix(STEP_PREFIX) for line in lines if line]


def list_transcripts(directory: Path = Path(TRANSCRIPTS_DIR)) -> list[Path]:
    """All saved transcripts, sorted by name. Empty if the directory is missing."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file())


def delete_transcripts(directory: Path = Path(TRANSCRIPTS_DIR)) -> int:
    """Delete every saved transcript (regular files only).

    Returns:
        Number of files removed.
    """
    removed = 0
    for path in list_transcripts(directory):
        try:
            path.unlink()
        except OSError as e:
            raise TranscriptError(f"Failed to delete {path.name!r}: {e}") from e
        removed += 1

    logger.info("Deleted %d transcripts from %s", removed, directory)
    return removed
