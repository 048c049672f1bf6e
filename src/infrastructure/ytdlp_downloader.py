"""yt-dlp + httpx による音声ダウンロード"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import yt_dlp

from src.domain.entities import AudioMetadata
from src.domain.exceptions import DownloadFailedError
from src.domain.video_id import canonical_watch_url
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class YtdlpAudioDownloader:
    """
    yt-dlp でストリームURLを解決し、httpx で音声を保存する実装

    yt-dlp にはメタデータ取得とフォーマット選択だけを任せ、
    バイト列の書き込みは自前で行う（部分ファイルを確実に消すため）
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 60.0,
        chunk_size: int = 64 * 1024,
        client: httpx.Client | None = None,
        ydl_factory: Callable[[dict[str, Any]], Any] = yt_dlp.YoutubeDL,
    ):
        """
        Args:
            user_agent: リクエストに付与するUser-Agent
            timeout: HTTPタイムアウト（秒）
            chunk_size: 書き込み単位（バイト）
            client: 使い回すhttpxクライアント（テスト用）
            ydl_factory: YoutubeDLの生成関数（テスト用）
        """
        self.user_agent = user_agent
        self.timeout = timeout
        self.chunk_size = chunk_size
        self._client = client
        self._ydl_factory = ydl_factory
        # yt-dlp のオプション（メタデータ取得のみ）
        self.ydl_opts = {
            "quiet": True,
            "no_warnings": True,
            "skip_download": True,
            "noplaylist": True,
            "format": "bestaudio/best",
            "http_headers": {"User-Agent": user_agent},
        }

    def fetch_metadata(self, video_id: str) -> AudioMetadata:
        """
        動画タイトルと最高音質の音声ストリームを取得

        Raises:
            DownloadFailedError: 動画情報の取得失敗
        """
        url = canonical_watch_url(video_id)
        logger.debug(f"[Download] メタデータ取得: {url}")

        try:
            with self._ydl_factory(self.ydl_opts) as ydl:
                info = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as e:
            raise DownloadFailedError(f"yt-dlp error for {video_id}: {e}") from e

        if not info:
            raise DownloadFailedError(f"No video info returned for {video_id}")

        audio_format = _select_audio_format(info)
        if audio_format is None:
            raise DownloadFailedError(f"No audio stream available for {video_id}")

        # yt-dlp が返すヘッダを引き継ぎつつ User-Agent は固定
        headers = dict(audio_format.get("http_headers") or {})
        headers["User-Agent"] = self.user_agent

        return AudioMetadata(
            video_id=video_id,
            title=info.get("title") or video_id,
            stream_url=audio_format["url"],
            ext=audio_format.get("ext") or "m4a",
            http_headers=headers,
        )

    def download(self, metadata: AudioMetadata, output_path: Path) -> Path:
        """
        音声ストリームをファイルに書き出す

        Raises:
            DownloadFailedError: HTTPエラー・書き込みエラー（部分ファイルは削除）
        """
        output_path = Path(output_path)
        logger.debug(f"[Download] 保存開始: {metadata.video_id} -> {output_path}")

        try:
            if self._client is not None:
                written = self._stream_to_file(self._client, metadata, output_path)
            else:
                with httpx.Client(
                    timeout=self.timeout,
                    follow_redirects=True,
                ) as client:
                    written = self._stream_to_file(client, metadata, output_path)
        except (httpx.HTTPError, OSError) as e:
            output_path.unlink(missing_ok=True)
            raise DownloadFailedError(
                f"Error streaming {metadata.video_id}: {e}"
            ) from e

        if written == 0:
            output_path.unlink(missing_ok=True)
            raise DownloadFailedError(f"Empty audio stream for {metadata.video_id}")

        logger.debug(f"[Download] 保存完了: {output_path} ({written} bytes)")
        return output_path

    def _stream_to_file(
        self,
        client: httpx.Client,
        metadata: AudioMetadata,
        output_path: Path,
    ) -> int:
        written = 0
        with client.stream(
            "GET",
            metadata.stream_url,
            headers=metadata.http_headers,
        ) as response:
            response.raise_for_status()
            with output_path.open("wb") as f:
                for chunk in response.iter_bytes(chunk_size=self.chunk_size):
                    f.write(chunk)
                    written += len(chunk)
        return written


def _select_audio_format(info: dict[str, Any]) -> dict[str, Any] | None:
    """
    extract_info の結果から音声ストリームを選ぶ

    format指定が効いていればトップレベルに url がある。
    ない場合は formats から音声のみ・最高ビットレートのものを選ぶ
    """
    if info.get("url"):
        return info

    candidates = [
        f
        for f in info.get("formats") or []
        if f.get("url") and f.get("acodec") not in (None, "none")
    ]
    if not candidates:
        return None

    audio_only = [f for f in candidates if f.get("vcodec") in (None, "none")]
    pool = audio_only or candidates
    return max(pool, key=lambda f: f.get("abr") or f.get("tbr") or 0)
