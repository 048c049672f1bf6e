"""1エントリ分の処理: ダウンロード → 切り出し"""

from dataclasses import dataclass

from src.application.interfaces.audio_downloader import AudioDownloader
from src.application.interfaces.audio_processor import AudioProcessor
from src.application.interfaces.workspace import Workspace
from src.domain.entities import ClipDescriptor, Entry, TimeRange, sanitize_title
from src.domain.exceptions import DownloadFailedError, UnresolvedSourceError
from src.domain.time_utils import format_seconds
from src.domain.video_id import extract_video_id
from src.infrastructure.logging_config import LogContext, get_logger

logger = get_logger(__name__)


@dataclass
class ClipOptions:
    """クリップ生成の設定"""

    audio_format: str = "mp3"  # 切り出しクリップの形式（出力形式に合わせる）


class ProcessClipUseCase:
    """
    1エントリを切り出しクリップに変換する

    処理フロー:
    1. URL → 動画ID
    2. 時刻表記 → TimeRange（ネットワークアクセス前に検証）
    3. メタデータ取得（タイトル・音声ストリーム）
    4. 全長音声を作業ディレクトリに保存
    5. 切り出し、全長音声を削除
    """

    def __init__(
        self,
        downloader: AudioDownloader,
        processor: AudioProcessor,
        workspace: Workspace,
        options: ClipOptions | None = None,
    ):
        self.downloader = downloader
        self.processor = processor
        self.workspace = workspace
        self.options = options or ClipOptions()

    def execute(self, entry: Entry, index: int) -> ClipDescriptor:
        """
        Args:
            entry: 処理するエントリ
            index: 入力内の位置（0始まり）

        Returns:
            ClipDescriptor

        Raises:
            UnresolvedSourceError: 動画IDを抽出できない
            MalformedTimeTokenError: 時刻表記が不正
            InvalidTimeRangeError: 終了が開始以前
            DownloadFailedError: ダウンロード失敗
            TrimFailedError: 切り出し失敗
        """
        ctx = LogContext(entry=index + 1, source=entry.source)

        video_id = extract_video_id(entry.source)
        if not video_id:
            raise UnresolvedSourceError(
                f"Could not extract video ID from URL: {entry.source}"
            )

        time_range = TimeRange.from_tokens(entry.start, entry.end)
        ctx = ctx.update(video_id=video_id)

        metadata = self.downloader.fetch_metadata(video_id)
        title = sanitize_title(metadata.title)
        logger.info(f"Processing ({index + 1}): {title}")
        logger.debug(f"  {ctx}")

        full_path = self.workspace.full_audio_path(index, video_id, metadata.ext)
        clip_path = self.workspace.clip_audio_path(
            index, video_id, self.options.audio_format
        )

        logger.info("  Downloading audio...")
        try:
            self.downloader.download(metadata, full_path)
        except DownloadFailedError:
            # 途中までのファイルは再開しないので必ず捨てる
            self.workspace.discard(full_path)
            raise

        logger.info(
            f"  Extracting clip {format_seconds(time_range.start_sec)}"
            f" - {format_seconds(time_range.end_sec)}..."
        )
        try:
            self.processor.trim(full_path, time_range, clip_path)
        finally:
            self.workspace.discard(full_path)

        return ClipDescriptor(
            index=index,
            video_id=video_id,
            path=clip_path,
            title=title,
            start=entry.start,
            end=entry.end,
            duration_sec=time_range.duration_sec,
        )
