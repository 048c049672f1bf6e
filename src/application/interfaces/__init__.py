# Application Interfaces (Protocols)
from src.application.interfaces.audio_downloader import AudioDownloader
from src.application.interfaces.audio_processor import (
    AudioProcessor,
    MergeProgressCallback,
)
from src.application.interfaces.workspace import Workspace

__all__ = [
    "AudioDownloader",
    "AudioProcessor",
    "MergeProgressCallback",
    "Workspace",
]
