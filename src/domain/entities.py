"""ドメインエンティティ定義"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from src.domain.exceptions import InvalidTimeRangeError
from src.domain.time_utils import parse_time_token


@dataclass(frozen=True)
class Entry:
    """入力1行分: 動画URL + 開始/終了時刻（未解析のまま保持）"""

    source: str
    start: str
    end: str


@dataclass(frozen=True)
class TimeRange:
    """時間範囲を表す値オブジェクト（秒単位）"""

    start_sec: int
    end_sec: int

    def __post_init__(self) -> None:
        if self.start_sec < 0:
            raise InvalidTimeRangeError("start_sec must be non-negative")
        if self.end_sec <= self.start_sec:
            raise InvalidTimeRangeError(
                f"end_sec must be greater than start_sec "
                f"(start={self.start_sec}, end={self.end_sec})"
            )

    @classmethod
    def from_tokens(cls, start: str, end: str) -> "TimeRange":
        """
        時刻表記の組からTimeRangeを生成

        Raises:
            MalformedTimeTokenError: 時刻表記が不正
            InvalidTimeRangeError: 終了が開始以前
        """
        return cls(start_sec=parse_time_token(start), end_sec=parse_time_token(end))

    @property
    def duration_sec(self) -> int:
        """区間の長さ（秒）"""
        return self.end_sec - self.start_sec

    def to_ffmpeg_ss(self) -> str:
        """ffmpegの-ssオプション用フォーマット（HH:MM:SS）"""
        return _to_hhmmss(self.start_sec)

    def to_ffmpeg_t(self) -> str:
        """ffmpegの-tオプション用フォーマット（duration）"""
        return _to_hhmmss(self.duration_sec)


def _to_hhmmss(seconds: int) -> str:
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


@dataclass
class AudioMetadata:
    """ダウンロード対象の音声ストリーム情報"""

    video_id: str
    title: str
    stream_url: str
    ext: str
    http_headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ClipDescriptor:
    """切り出し済みクリップ（一時ファイル）"""

    index: int
    video_id: str
    path: Path
    title: str
    start: str
    end: str
    duration_sec: int


@dataclass(frozen=True)
class EntryFailure:
    """処理に失敗したエントリ"""

    index: int
    source: str
    reason: str


@dataclass
class BatchResult:
    """全エントリの処理結果"""

    clips: list[ClipDescriptor] = field(default_factory=list)
    failures: list[EntryFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.clips)

    @property
    def is_empty(self) -> bool:
        return not self.clips


def sanitize_title(title: str) -> str:
    """タイトルから英数字・空白以外の文字を除去"""
    return re.sub(r"[^\w\s]", "", title)


def build_output_filename(output: str, audio_format: str) -> str:
    """
    出力ファイル名に拡張子を補完

    Example:
        build_output_filename("mix", "mp3")      # → "mix.mp3"
        build_output_filename("mix.mp3", "mp3")  # → "mix.mp3"
    """
    suffix = f".{audio_format}"
    return output if output.endswith(suffix) else f"{output}{suffix}"
