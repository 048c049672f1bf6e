"""一時作業ディレクトリのインターフェース"""

from pathlib import Path
from typing import Protocol


class Workspace(Protocol):
    """中間ファイル（全長音声・切り出しクリップ）の置き場所"""

    path: Path

    def ensure(self) -> Path:
        """ディレクトリがなければ作成"""
        ...

    def full_audio_path(self, index: int, video_id: str, ext: str) -> Path:
        """ダウンロードした全長音声のパス"""
        ...

    def clip_audio_path(self, index: int, video_id: str, audio_format: str) -> Path:
        """切り出したクリップのパス"""
        ...

    def discard(self, artifact: Path) -> bool:
        """中間ファイルを削除（失敗しても例外にしない）"""
        ...

    def cleanup(self) -> bool:
        """空ならディレクトリを削除（失敗しても例外にしない）"""
        ...
