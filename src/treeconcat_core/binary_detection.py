"""
Heuristic binary detection.

Samples the start of a file and counts bytes outside tab, newline, carriage
return and printable ASCII. Deliberately approximate: UTF-8 text that is
mostly non-ASCII will be reported as binary.
"""

from pathlib import Path

from .constants import BINARY_SAMPLE_SIZE, BINARY_THRESHOLD, TEXT_BYTES


def is_binary_content(sample: bytes, threshold: float = BINARY_THRESHOLD) -> bool:
    """
    Classify a byte sample.

    Args:
        sample: Leading bytes of a file
        threshold: Fraction of non-text bytes above which the sample is binary

    Returns:
        True if the sample looks binary; an empty sample is text
    """
    if not sample:
        return False
    non_text = sum(1 for byte in sample if byte not in TEXT_BYTES)
    return non_text / len(sample) > threshold


def is_binary_file(path: Path,
                   sample_size: int = BINARY_SAMPLE_SIZE,
                   threshold: float = BINARY_THRESHOLD) -> bool:
    """
    Read up to sample_size bytes from the start of a file and classify them.

    Raises:
        OSError: If the file cannot be opened or read
    """
    with open(path, 'rb') as f:
        sample = f.read(sample_size)
    return is_binary_content(sample, threshold)
