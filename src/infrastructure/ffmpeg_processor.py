"""ffmpeg による音声の切り出し・結合"""

import subprocess
import threading
from collections import deque
from pathlib import Path

from src.application.interfaces.audio_processor import MergeProgressCallback
from src.domain.entities import TimeRange
from src.domain.exceptions import (
    CollaboratorUnavailableError,
    MergeFailedError,
    TrimFailedError,
)
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

# エラー時にログへ残すffmpeg出力の行数
_ERROR_TAIL_LINES = 20

# `-progress` 出力のキー（stream_N_M_q は映像ストリームのみ）
_PROGRESS_KEYS = frozenset(
    {
        "frame",
        "fps",
        "bitrate",
        "total_size",
        "out_time_us",
        "out_time_ms",
        "out_time",
        "dup_frames",
        "drop_frames",
        "speed",
        "progress",
    }
)


class FfmpegAudioProcessor:
    """ffmpeg（外部プロセス）による実装"""

    def __init__(
        self,
        ffmpeg_path: str = "ffmpeg",
        trim_timeout: float = 300,
        merge_timeout: float = 1800,
    ):
        """
        Args:
            ffmpeg_path: ffmpegの実行パス
            trim_timeout: 切り出しのタイムアウト（秒）
            merge_timeout: 結合のタイムアウト（秒）
        """
        self.ffmpeg_path = ffmpeg_path
        self.trim_timeout = trim_timeout
        self.merge_timeout = merge_timeout

    def ensure_available(self) -> None:
        """
        `ffmpeg -version` が実行できるか確認

        Raises:
            CollaboratorUnavailableError: ffmpegが見つからない・実行できない
        """
        try:
            subprocess.run(
                [self.ffmpeg_path, "-version"],
                capture_output=True,
                check=True,
                timeout=10,
            )
        except FileNotFoundError as e:
            raise CollaboratorUnavailableError(
                f"ffmpeg is not installed or not in PATH ({self.ffmpeg_path})"
            ) from e
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            raise CollaboratorUnavailableError(f"ffmpeg is not usable: {e}") from e

    def trim(
        self,
        input_path: Path,
        time_range: TimeRange,
        output_path: Path,
    ) -> Path:
        """
        -ss / -t で指定範囲を切り出し、出力拡張子の形式でエンコード

        Raises:
            TrimFailedError: ffmpegエラー・タイムアウト・出力なし
        """
        cmd = [
            self.ffmpeg_path,
            "-y",  # 上書き許可（再実行時に前回の残骸があっても続行）
            "-ss",
            time_range.to_ffmpeg_ss(),
            "-i",
            str(input_path),
            "-t",
            time_range.to_ffmpeg_t(),
            "-vn",  # 音声のみ
            str(output_path),
        ]
        logger.debug(f"[ffmpeg] 切り出しコマンド: {' '.join(cmd)}")

        try:
            subprocess.run(
                cmd,
                capture_output=True,
                check=True,
                timeout=self.trim_timeout,
            )
        except subprocess.TimeoutExpired as e:
            Path(output_path).unlink(missing_ok=True)
            raise TrimFailedError(f"Timeout extracting clip: {e}") from e
        except subprocess.CalledProcessError as e:
            Path(output_path).unlink(missing_ok=True)
            raise TrimFailedError(f"ffmpeg error: {_decode(e.stderr)}") from e
        except OSError as e:
            raise TrimFailedError(f"Cannot run ffmpeg: {e}") from e

        output = Path(output_path)
        if not output.exists() or output.stat().st_size == 0:
            raise TrimFailedError(f"Output file is missing or empty: {output}")
        return output

    def merge(
        self,
        input_paths: list[Path],
        output_path: Path,
        bitrate: str,
        total_duration_sec: int,
        progress_callback: MergeProgressCallback | None = None,
    ) -> Path:
        """
        concatフィルタで入力順に結合（再エンコード）

        `-progress pipe:1` の out_time_us から進捗率を算出してコールバックする

        Raises:
            MergeFailedError: ffmpegエラー・タイムアウト
        """
        if not input_paths:
            raise MergeFailedError("No input files to merge")

        cmd = build_merge_command(self.ffmpeg_path, input_paths, output_path, bitrate)
        logger.debug(f"[ffmpeg] 結合コマンド: {' '.join(cmd)}")
        logger.info(f"[ffmpeg] {len(input_paths)}件のクリップを結合開始")

        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise MergeFailedError(f"Cannot run ffmpeg: {e}") from e

        tail: deque[str] = deque(maxlen=_ERROR_TAIL_LINES)
        reported: list[int] = []

        def _read_output() -> None:
            for raw_line in proc.stdout:
                line = raw_line.strip()
                if not line:
                    continue
                percent = parse_progress_line(line, total_duration_sec)
                if percent is None:
                    if not is_progress_line(line):
                        tail.append(line)
                    continue
                if progress_callback and (not reported or percent > reported[-1]):
                    reported.append(percent)
                    progress_callback(percent)

        # ffmpegが無出力のままでもタイムアウトできるよう、読み込みは別スレッド
        reader = threading.Thread(target=_read_output, daemon=True)
        reader.start()
        try:
            try:
                returncode = proc.wait(timeout=self.merge_timeout)
            except subprocess.TimeoutExpired as e:
                raise MergeFailedError(
                    f"Timeout merging clips after {self.merge_timeout}s"
                ) from e
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()
            reader.join(timeout=5)
            proc.stdout.close()

        if returncode != 0:
            error_msg = "\n".join(tail)
            logger.error(f"[ffmpeg] 結合失敗: {error_msg}")
            raise MergeFailedError(f"ffmpeg merge error (exit {returncode}): {error_msg}")

        if progress_callback and (not reported or reported[-1] < 100):
            progress_callback(100)

        logger.info(f"[ffmpeg] 結合完了: {output_path}")
        return Path(output_path)


def build_merge_command(
    ffmpeg_path: str,
    input_paths: list[Path],
    output_path: Path,
    bitrate: str,
) -> list[str]:
    """結合用のffmpegコマンドを組み立て"""
    cmd = [ffmpeg_path, "-y", "-nostats", "-loglevel", "error", "-progress", "pipe:1"]
    for path in input_paths:
        cmd.extend(["-i", str(path)])

    streams = "".join(f"[{i}:a]" for i in range(len(input_paths)))
    cmd.extend(
        [
            "-filter_complex",
            f"{streams}concat=n={len(input_paths)}:v=0:a=1[out]",
            "-map",
            "[out]",
            "-b:a",
            bitrate,
            str(output_path),
        ]
    )
    return cmd


def parse_progress_line(line: str, total_duration_sec: int) -> int | None:
    """
    `-progress` 出力の1行から進捗率（0-100）を求める

    out_time_us / out_time_ms（どちらもマイクロ秒）と progress=end のみ対象。
    それ以外の行や合計長が0の場合はNone
    """
    key, sep, value = line.partition("=")
    if not sep:
        return None

    if key == "progress" and value == "end":
        return 100

    if key not in ("out_time_us", "out_time_ms") or total_duration_sec <= 0:
        return None

    try:
        elapsed_sec = int(value) / 1_000_000
    except ValueError:
        # 先頭付近では "N/A" が出ることがある
        return None

    percent = int(elapsed_sec / total_duration_sec * 100)
    return max(0, min(percent, 100))


def is_progress_line(line: str) -> bool:
    """`-progress` が出力する key=value 行か（エラーメッセージ中の "=" は対象外）"""
    key, sep, _ = line.partition("=")
    return bool(sep) and key in _PROGRESS_KEYS


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
