from __future__ import annotations

import logging
import typing
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SampleLimits:
    """How much of a source is read for guessing."""

    sample_buffer_bytes: int = 32 * 1024  # 32 KiB


DEFAULT_SAMPLE_LIMITS = SampleLimits()


def reassemble(lines: typing.Iterable[str], newline: str) -> str:
    """Join decoded lines with ``newline``. No newline is added after the last line."""
    return newline.join(lines)


def read_sample(
    path: str | Path, *, limits: SampleLimits = DEFAULT_SAMPLE_LIMITS
) -> bytes:
    """Read the leading bytes of ``path`` used as a guess sample."""
    path = Path(path)
    with open(path, "rb") as f:
        sample = f.read(limits.sample_buffer_bytes)
    logger.debug("Read %d sample bytes from %s", len(sample), path)
    return sample
