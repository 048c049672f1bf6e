# Infrastructure Layer
from src.infrastructure.entry_reader import load_entries, prompt_entries, read_entries_from_file
from src.infrastructure.ffmpeg_processor import FfmpegAudioProcessor
from src.infrastructure.workspace import TempWorkspace
from src.infrastructure.ytdlp_downloader import YtdlpAudioDownloader

__all__ = [
    "YtdlpAudioDownloader",
    "FfmpegAudioProcessor",
    "TempWorkspace",
    "load_entries",
    "prompt_entries",
    "read_entries_from_file",
]
