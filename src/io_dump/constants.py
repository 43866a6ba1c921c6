"""Application-wide constants for io-dump.

Constants that define the wire format and application behavior.
For user-configurable settings, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    "DEFAULT_LOG_DIR",
    "DEFAULT_LOG_FILENAME",
    # Wire format
    "HEADER_FORMAT",
    "HEADER_SIZE",
    "TAG_SIZE",
    "TIMESTAMP_SIZE",
    "LENGTH_SIZE",
    "MAX_TIMESTAMP_NS",
    # Reading
    "READ_CHUNK_SIZE",
    # Text rendering
    "RENDER_BYTES_PER_LINE",
    "READ_ARROW",
    "WRITE_ARROW",
]

import struct

from platformdirs import user_log_dir

# ============================================================================
# Application Identity
# ============================================================================

# Application name used for logger names, directory names, etc.
APP_NAME: str = "io-dump"

# Platform-specific default directory for event logs
# - macOS: ~/Library/Logs/io-dump
# - Linux: ~/.local/state/io-dump/log
# - Windows: %LOCALAPPDATA%\io-dump\Logs
DEFAULT_LOG_DIR: str = user_log_dir(APP_NAME)

DEFAULT_LOG_FILENAME: str = "dump.bin"

# ============================================================================
# Wire Format
# ============================================================================

# Frame header: direction tag (u8), timestamp in ns (u64), payload length (u64).
# Network byte order, no padding.
HEADER_FORMAT: str = ">BQQ"

TAG_SIZE: int = 1
TIMESTAMP_SIZE: int = 8
LENGTH_SIZE: int = 8
HEADER_SIZE: int = struct.calcsize(HEADER_FORMAT)

MAX_TIMESTAMP_NS: int = 2**64 - 1

# Chunk size used when pulling payload bytes from a log stream
READ_CHUNK_SIZE: int = 64 * 1024

# ============================================================================
# Text Rendering
# ============================================================================

# Bytes shown per hex dump line
RENDER_BYTES_PER_LINE: int = 25

READ_ARROW: str = "->"
WRITE_ARROW: str = "<-"
