"""CLI エントリーポイント: YouTube音声の切り出し・結合"""

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

# プロジェクトルートをパスに追加（python app/main.py で直接実行する場合）
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

from config.settings import Settings, get_settings
from src.application.interfaces.audio_downloader import AudioDownloader
from src.application.interfaces.audio_processor import AudioProcessor
from src.application.usecases.merge_audio import AudioMergeUseCase, MergeOptions
from src.domain.entities import Entry
from src.domain.exceptions import AudioMergerError, CollaboratorUnavailableError
from src.infrastructure.entry_reader import load_entries
from src.infrastructure.ffmpeg_processor import FfmpegAudioProcessor
from src.infrastructure.logging_config import get_logger, parse_log_level, setup_logging
from src.infrastructure.workspace import TempWorkspace
from src.infrastructure.ytdlp_downloader import YtdlpAudioDownloader

__version__ = "1.0.0"

logger = get_logger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """CLI引数の定義（デフォルト値は設定から）"""
    parser = argparse.ArgumentParser(
        prog="youtube-audio-merger",
        description="Download and merge audio from YouTube videos with specific time ranges",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-i", "--input",
        help="Path to input file with YouTube URLs and timestamps "
        "(interactive mode when omitted)",
    )
    parser.add_argument(
        "-o", "--output", default=settings.DEFAULT_OUTPUT,
        help=f"Output filename (default: {settings.DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "-f", "--format", default=settings.DEFAULT_FORMAT,
        help=f"Output audio format (default: {settings.DEFAULT_FORMAT})",
    )
    parser.add_argument(
        "-b", "--bitrate", default=settings.DEFAULT_BITRATE,
        help=f"Output audio bitrate (default: {settings.DEFAULT_BITRATE})",
    )
    parser.add_argument(
        "--temp-dir", default=settings.TEMP_DIR,
        help=f"Directory for intermediate files (default: {settings.TEMP_DIR})",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    return parser


def init_processor(settings: Settings) -> FfmpegAudioProcessor:
    return FfmpegAudioProcessor(
        ffmpeg_path=settings.FFMPEG_PATH,
        trim_timeout=settings.TRIM_TIMEOUT,
        merge_timeout=settings.MERGE_TIMEOUT,
    )


def init_downloader(settings: Settings) -> YtdlpAudioDownloader:
    return YtdlpAudioDownloader(
        user_agent=settings.USER_AGENT,
        timeout=settings.DOWNLOAD_TIMEOUT,
        chunk_size=settings.DOWNLOAD_CHUNK_SIZE,
    )


def print_merge_progress(percent: int) -> None:
    """結合の進捗を同じ行に上書き表示"""
    sys.stdout.write(f"Merging: {percent}%\r")
    if percent >= 100:
        sys.stdout.write("\n")
    sys.stdout.flush()


def print_entry_progress(index: int, total: int, entry: Entry) -> None:
    logger.debug(f"[{index + 1}/{total}] {entry.source} {entry.start} {entry.end}")


def run(
    args: argparse.Namespace,
    processor: AudioProcessor,
    downloader: AudioDownloader,
    input_func: Callable[[str], str] = input,
) -> int:
    """
    パース済み引数で処理を実行

    Returns:
        終了コード（0: 正常終了 / 1: エラー）
    """
    # 作業前に一度だけ ffmpeg を確認
    try:
        processor.ensure_available()
    except CollaboratorUnavailableError as e:
        logger.error(f"Error: {e}")
        logger.error(
            "Please install ffmpeg to use this tool: https://ffmpeg.org/download.html"
        )
        return 1

    options = MergeOptions(
        output=args.output,
        audio_format=args.format,
        bitrate=args.bitrate,
    )
    usecase = AudioMergeUseCase(
        downloader=downloader,
        processor=processor,
        workspace=TempWorkspace(args.temp_dir),
        options=options,
    )

    try:
        entries = load_entries(args.input, input_func=input_func)
        report = usecase.execute(
            entries,
            entry_progress=print_entry_progress,
            merge_progress=print_merge_progress,
        )
    except AudioMergerError as e:
        logger.error(f"Error: {e}")
        return 1

    if report.batch.failures:
        logger.warning(
            f"{len(report.batch.failures)} of "
            f"{report.batch.succeeded + len(report.batch.failures)} entries failed"
        )
    if report.merged:
        logger.info(f"Done! Output: {report.output_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    # .envファイルを最初に読み込む
    load_dotenv(project_root / ".env")
    settings = get_settings()

    args = build_parser(settings).parse_args(argv)

    log_level = logging.DEBUG if args.verbose else parse_log_level(settings.LOG_LEVEL)
    setup_logging(level=log_level)

    try:
        return run(args, init_processor(settings), init_downloader(settings))
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 130
    except Exception as e:
        logger.exception(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
