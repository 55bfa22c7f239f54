from os import getenv
from .utils.io import DEFAULT_ENCODING  # NOQA: F401

# Minimum level of the log entries that get written, by `LogLevel` name
LOG_LEVEL: str = getenv("RETORT_LOG_LEVEL", "Info")

# Size of the blocks read from disk when streaming a file download
FILE_CHUNK_SIZE: int = int(getenv("RETORT_FILE_CHUNK_SIZE", 64_000))

# Element wrapping XML documents that don't have a single top-level key
XML_ROOT: str = getenv("RETORT_XML_ROOT", "response")

# EOF
