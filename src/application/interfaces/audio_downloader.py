"""音声ダウンロードインターフェース"""

from pathlib import Path
from typing import Protocol

from src.domain.entities import AudioMetadata


class AudioDownloader(Protocol):
    """YouTube音声取得のインターフェース"""

    def fetch_metadata(self, video_id: str) -> AudioMetadata:
        """
        動画メタデータと最高音質の音声ストリームを取得（ダウンロードしない）

        Args:
            video_id: YouTube動画ID

        Returns:
            AudioMetadata（タイトル・ストリームURL・拡張子）

        Raises:
            DownloadFailedError: 取得失敗
        """
        ...

    def download(self, metadata: AudioMetadata, output_path: Path) -> Path:
        """
        音声ストリームを全長ファイルとして保存

        失敗時は途中まで書き込んだファイルを残さない

        Args:
            metadata: fetch_metadataの結果
            output_path: 保存先パス

        Returns:
            保存先パス

        Raises:
            DownloadFailedError: ストリーム読み込み・書き込み失敗
        """
        ...
