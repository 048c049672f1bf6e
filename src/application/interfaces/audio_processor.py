"""音声の切り出し・結合インターフェース"""

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from src.domain.entities import TimeRange

# 結合の進捗コールバック (percent: 0-100)
MergeProgressCallback = Callable[[int], None]


class AudioProcessor(Protocol):
    """音声変換ツール（ffmpeg）のインターフェース"""

    def ensure_available(self) -> None:
        """
        ツールが実行可能か確認

        Raises:
            CollaboratorUnavailableError: 実行できない
        """
        ...

    def trim(
        self,
        input_path: Path,
        time_range: TimeRange,
        output_path: Path,
    ) -> Path:
        """
        指定範囲を切り出し

        Args:
            input_path: 全長音声ファイル
            time_range: 切り出す範囲
            output_path: 出力ファイルパス

        Returns:
            出力ファイルパス

        Raises:
            TrimFailedError: 切り出し失敗
        """
        ...

    def merge(
        self,
        input_paths: list[Path],
        output_path: Path,
        bitrate: str,
        total_duration_sec: int,
        progress_callback: MergeProgressCallback | None = None,
    ) -> Path:
        """
        複数ファイルを入力順に結合

        Args:
            input_paths: 結合するファイル（この順に連結）
            output_path: 出力ファイルパス
            bitrate: 出力ビットレート（例: "128k"）
            total_duration_sec: 入力の合計長（進捗計算用）
            progress_callback: 進捗コールバック

        Returns:
            出力ファイルパス

        Raises:
            MergeFailedError: 結合失敗
        """
        ...
