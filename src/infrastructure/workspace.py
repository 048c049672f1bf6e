"""中間ファイル用の一時ディレクトリ"""

from pathlib import Path

from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

# デフォルトの作業ディレクトリ（カレントディレクトリ直下）
DEFAULT_TEMP_DIR = Path("temp_audio_files")


class TempWorkspace:
    """
    実行中だけ使う作業ディレクトリ

    - 起動時に作成（既存ならそのまま使う）
    - 中間ファイルは不要になった時点で個別に削除
    - 最後に空であればディレクトリごと削除

    ファイル名にエントリ番号を含めるため、同じ動画が複数回指定されても衝突しない
    """

    def __init__(self, path: Path | str = DEFAULT_TEMP_DIR):
        self.path = Path(path)

    def ensure(self) -> Path:
        """ディレクトリがなければ作成"""
        self.path.mkdir(parents=True, exist_ok=True)
        return self.path

    def full_audio_path(self, index: int, video_id: str, ext: str) -> Path:
        return self.path / f"{index:03d}_{video_id}_full.{ext}"

    def clip_audio_path(self, index: int, video_id: str, audio_format: str) -> Path:
        return self.path / f"{index:03d}_{video_id}_clip.{audio_format}"

    def discard(self, artifact: Path) -> bool:
        """
        中間ファイルを削除

        Returns:
            削除できた（または元々存在しない）場合はTrue
        """
        try:
            artifact.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.warning(f"[Workspace] 一時ファイルを削除できません: {artifact} - {e}")
            return False

    def cleanup(self) -> bool:
        """
        空であればディレクトリを削除

        Returns:
            削除した場合はTrue（空でない・存在しない・失敗時はFalse）
        """
        try:
            if not self.path.is_dir():
                return False
            if any(self.path.iterdir()):
                logger.debug(f"[Workspace] 空でないため残します: {self.path}")
                return False
            self.path.rmdir()
            logger.debug(f"[Workspace] 削除しました: {self.path}")
            return True
        except OSError as e:
            logger.warning(f"[Workspace] 一時ディレクトリを削除できません: {self.path} - {e}")
            return False
