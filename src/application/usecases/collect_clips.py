"""全エントリを順番に処理してクリップを集める"""

from collections.abc import Callable

from src.application.usecases.process_clip import ProcessClipUseCase
from src.domain.entities import BatchResult, Entry, EntryFailure
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

# 進捗コールバック (index: 0始まり, total, entry)
EntryProgressCallback = Callable[[int, int, Entry], None]


class CollectClipsUseCase:
    """
    エントリを1件ずつ（並列化しない）処理する

    個別の失敗はログに残して次へ進む。成功したクリップは入力順のまま返す
    """

    def __init__(self, process_clip: ProcessClipUseCase):
        self.process_clip = process_clip

    def execute(
        self,
        entries: list[Entry],
        progress_callback: EntryProgressCallback | None = None,
    ) -> BatchResult:
        result = BatchResult()
        total = len(entries)

        for index, entry in enumerate(entries):
            if progress_callback:
                progress_callback(index, total, entry)

            try:
                clip = self.process_clip.execute(entry, index)
            except Exception as e:
                logger.error(
                    f"Failed to process entry {index + 1} ({entry.source}): {e}"
                )
                result.failures.append(
                    EntryFailure(index=index, source=entry.source, reason=str(e))
                )
                continue

            result.clips.append(clip)

        logger.info(
            f"[Batch] 成功 {result.succeeded}件 / 失敗 {len(result.failures)}件"
        )
        return result
