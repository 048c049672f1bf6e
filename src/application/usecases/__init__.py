# Use Cases
from src.application.usecases.collect_clips import CollectClipsUseCase
from src.application.usecases.merge_audio import (
    AudioMergeUseCase,
    MergeOptions,
    MergeReport,
)
from src.application.usecases.merge_clips import MergeClipsUseCase
from src.application.usecases.process_clip import ClipOptions, ProcessClipUseCase

__all__ = [
    "AudioMergeUseCase",
    "MergeOptions",
    "MergeReport",
    "CollectClipsUseCase",
    "MergeClipsUseCase",
    "ProcessClipUseCase",
    "ClipOptions",
]
