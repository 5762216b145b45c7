"""
Central configuration for directory concatenation and ignore file processing
"""

# Single source of truth for ignore filename
IGNORE_FILENAME = ".gitignore"

# Output artifact written to the invocation's working directory
OUTPUT_FILENAME = "combined.txt"

# Header written before each file's contents
FILE_HEADER_PREFIX = "# File: "

# Binary detection probe
BINARY_SAMPLE_SIZE = 512
BINARY_THRESHOLD = 0.30
TEXT_BYTES = frozenset([9, 10, 13]) | frozenset(range(32, 127))

# Copy buffer size when streaming file contents
COPY_CHUNK_SIZE = 64 * 1024

# Limits for ignore files
MAX_IGNORE_FILE_SIZE = 1024 * 1024  # 1MB

# Pattern syntax that is read literally rather than as gitignore syntax
UNSUPPORTED_PATTERN_CHARS = ('[', '\\')
