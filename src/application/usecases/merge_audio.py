"""メインユースケース: エントリ一覧から1つの音声ファイルを作る"""

from dataclasses import dataclass, field
from pathlib import Path

from src.application.interfaces.audio_downloader import AudioDownloader
from src.application.interfaces.audio_processor import (
    AudioProcessor,
    MergeProgressCallback,
)
from src.application.interfaces.workspace import Workspace
from src.application.usecases.collect_clips import (
    CollectClipsUseCase,
    EntryProgressCallback,
)
from src.application.usecases.merge_clips import MergeClipsUseCase
from src.application.usecases.process_clip import ClipOptions, ProcessClipUseCase
from src.domain.entities import BatchResult, Entry, build_output_filename
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class MergeOptions:
    """実行オプション（CLI引数から組み立てる）"""

    output: str = "merged_audio.mp3"
    audio_format: str = "mp3"
    bitrate: str = "128k"

    @property
    def output_path(self) -> Path:
        """拡張子を補完した出力パス"""
        return Path(build_output_filename(self.output, self.audio_format))


@dataclass
class MergeReport:
    """実行結果"""

    output_path: Path | None
    batch: BatchResult = field(default_factory=BatchResult)

    @property
    def merged(self) -> bool:
        return self.output_path is not None


class AudioMergeUseCase:
    """
    エントリ処理 → 結合 を通しで実行する

    成功したクリップが1件もなければ結合せずに終了する（エラーではない）
    """

    def __init__(
        self,
        downloader: AudioDownloader,
        processor: AudioProcessor,
        workspace: Workspace,
        options: MergeOptions | None = None,
    ):
        self.workspace = workspace
        self.options = options or MergeOptions()
        self.collect_clips = CollectClipsUseCase(
            ProcessClipUseCase(
                downloader=downloader,
                processor=processor,
                workspace=workspace,
                options=ClipOptions(audio_format=self.options.audio_format),
            )
        )
        self.merge_clips = MergeClipsUseCase(
            processor=processor,
            workspace=workspace,
            bitrate=self.options.bitrate,
        )

    def execute(
        self,
        entries: list[Entry],
        entry_progress: EntryProgressCallback | None = None,
        merge_progress: MergeProgressCallback | None = None,
    ) -> MergeReport:
        """
        Raises:
            MergeFailedError: 結合失敗（部分的な出力は使わない）
        """
        if not entries:
            logger.info("No valid entries found. Exiting.")
            return MergeReport(output_path=None)

        logger.info(f"Processing {len(entries)} videos...")
        self.workspace.ensure()

        batch = self.collect_clips.execute(entries, entry_progress)
        if batch.is_empty:
            logger.error("No clips were successfully processed. Exiting.")
            self.workspace.cleanup()
            return MergeReport(output_path=None, batch=batch)

        logger.info("Merging audio clips...")
        output_path = self.merge_clips.execute(
            batch.clips,
            self.options.output_path,
            merge_progress,
        )
        return MergeReport(output_path=output_path, batch=batch)
