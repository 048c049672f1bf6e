# Domain Layer
from src.domain.entities import (
    AudioMetadata,
    BatchResult,
    ClipDescriptor,
    Entry,
    EntryFailure,
    TimeRange,
    build_output_filename,
    sanitize_title,
)
from src.domain.entry_parser import parse_entries_text, parse_entry_line
from src.domain.exceptions import (
    AudioMergerError,
    CollaboratorUnavailableError,
    DownloadFailedError,
    InputFileError,
    InvalidTimeRangeError,
    MalformedTimeTokenError,
    MergeFailedError,
    NothingToMergeError,
    TrimFailedError,
    UnresolvedSourceError,
)
from src.domain.time_utils import format_seconds, parse_time_token
from src.domain.video_id import canonical_watch_url, extract_video_id

__all__ = [
    "Entry",
    "TimeRange",
    "AudioMetadata",
    "ClipDescriptor",
    "EntryFailure",
    "BatchResult",
    "sanitize_title",
    "build_output_filename",
    "parse_entry_line",
    "parse_entries_text",
    "parse_time_token",
    "format_seconds",
    "extract_video_id",
    "canonical_watch_url",
    "AudioMergerError",
    "UnresolvedSourceError",
    "MalformedTimeTokenError",
    "InvalidTimeRangeError",
    "DownloadFailedError",
    "TrimFailedError",
    "MergeFailedError",
    "NothingToMergeError",
    "CollaboratorUnavailableError",
    "InputFileError",
]
