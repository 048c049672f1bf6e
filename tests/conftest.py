"""テスト共通のフェイク実装とフィクスチャ"""

from pathlib import Path

import pytest

from src.domain.entities import AudioMetadata, TimeRange
from src.domain.exceptions import (
    CollaboratorUnavailableError,
    DownloadFailedError,
    MergeFailedError,
    TrimFailedError,
)
from src.infrastructure.workspace import TempWorkspace


class FakeDownloader:
    """ネットワークに出ないダウンローダー"""

    def __init__(
        self,
        fail_metadata: set[str] | None = None,
        fail_download: set[str] | None = None,
    ):
        self.fail_metadata = fail_metadata or set()
        self.fail_download = fail_download or set()
        self.fetched: list[str] = []
        self.downloaded: list[Path] = []

    def fetch_metadata(self, video_id: str) -> AudioMetadata:
        self.fetched.append(video_id)
        if video_id in self.fail_metadata:
            raise DownloadFailedError(f"Video unavailable: {video_id}")
        return AudioMetadata(
            video_id=video_id,
            title=f"Song {video_id}!?",
            stream_url=f"https://media.example.com/{video_id}",
            ext="webm",
        )

    def download(self, metadata: AudioMetadata, output_path: Path) -> Path:
        self.downloaded.append(output_path)
        if metadata.video_id in self.fail_download:
            output_path.write_bytes(b"partial")
            raise DownloadFailedError("Error streaming from YouTube")
        output_path.write_bytes(f"full:{metadata.video_id}".encode())
        return output_path


class FakeProcessor:
    """ffmpegの代わりにバイト列を加工するだけの実装"""

    def __init__(
        self,
        available: bool = True,
        fail_trim: bool = False,
        fail_merge: bool = False,
    ):
        self.available = available
        self.fail_trim = fail_trim
        self.fail_merge = fail_merge
        self.trim_calls: list[tuple[Path, TimeRange, Path]] = []
        self.merge_calls: list[dict] = []

    def ensure_available(self) -> None:
        if not self.available:
            raise CollaboratorUnavailableError("ffmpeg is not installed or not in PATH")

    def trim(self, input_path: Path, time_range: TimeRange, output_path: Path) -> Path:
        self.trim_calls.append((input_path, time_range, output_path))
        if self.fail_trim:
            raise TrimFailedError("ffmpeg error: invalid data")
        data = input_path.read_bytes()
        output_path.write_bytes(
            data + f"[{time_range.start_sec}-{time_range.end_sec}]".encode()
        )
        return output_path

    def merge(
        self,
        input_paths: list[Path],
        output_path: Path,
        bitrate: str,
        total_duration_sec: int,
        progress_callback=None,
    ) -> Path:
        self.merge_calls.append(
            {
                "inputs": list(input_paths),
                "output": output_path,
                "bitrate": bitrate,
                "total_duration_sec": total_duration_sec,
            }
        )
        if self.fail_merge:
            raise MergeFailedError("ffmpeg merge error")
        output_path.write_bytes(b"|".join(p.read_bytes() for p in input_paths))
        if progress_callback:
            progress_callback(50)
            progress_callback(100)
        return output_path


@pytest.fixture
def downloader() -> FakeDownloader:
    return FakeDownloader()


@pytest.fixture
def processor() -> FakeProcessor:
    return FakeProcessor()


@pytest.fixture
def workspace(tmp_path: Path) -> TempWorkspace:
    ws = TempWorkspace(tmp_path / "temp_audio_files")
    ws.ensure()
    return ws
