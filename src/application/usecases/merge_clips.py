"""クリップを1つの出力ファイルにまとめる"""

import shutil
from pathlib import Path

from src.application.interfaces.audio_processor import (
    AudioProcessor,
    MergeProgressCallback,
)
from src.application.interfaces.workspace import Workspace
from src.domain.entities import ClipDescriptor
from src.domain.exceptions import MergeFailedError, NothingToMergeError
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)


class MergeClipsUseCase:
    """
    クリップの結合

    - 1件: 再エンコードせずにコピー
    - 複数件: ffmpegで入力順に結合（指定ビットレート）

    完了後に一時クリップを削除し、空になった作業ディレクトリも削除する
    """

    def __init__(
        self,
        processor: AudioProcessor,
        workspace: Workspace,
        bitrate: str = "128k",
    ):
        self.processor = processor
        self.workspace = workspace
        self.bitrate = bitrate

    def execute(
        self,
        clips: list[ClipDescriptor],
        output_path: Path,
        progress_callback: MergeProgressCallback | None = None,
    ) -> Path:
        """
        Args:
            clips: 結合するクリップ（この順に連結）
            output_path: 出力ファイルパス
            progress_callback: 結合の進捗コールバック（複数件のときのみ）

        Returns:
            出力ファイルパス

        Raises:
            NothingToMergeError: クリップが0件
            MergeFailedError: コピー・結合失敗
        """
        if not clips:
            raise NothingToMergeError("No clips to merge")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        if len(clips) == 1:
            self._copy_single(clips[0], output_path)
        else:
            self.processor.merge(
                [clip.path for clip in clips],
                output_path,
                self.bitrate,
                sum(clip.duration_sec for clip in clips),
                progress_callback,
            )
            logger.info(f"Merge complete! Audio saved to: {output_path}")

        # 1件の削除失敗で残りの削除を止めない
        for clip in clips:
            self.workspace.discard(clip.path)
        self.workspace.cleanup()

        return output_path

    def _copy_single(self, clip: ClipDescriptor, output_path: Path) -> None:
        try:
            shutil.copyfile(clip.path, output_path)
        except OSError as e:
            raise MergeFailedError(
                f"Cannot copy clip {clip.path} to {output_path}: {e}"
            ) from e
        logger.info(f"Single clip saved to: {output_path}")
