"""yt-dlp + httpx ダウンローダーのテスト（ネットワークなし）"""

from pathlib import Path
from typing import Any

import httpx
import pytest
import yt_dlp

from src.domain.entities import AudioMetadata
from src.domain.exceptions import DownloadFailedError
from src.infrastructure.ytdlp_downloader import YtdlpAudioDownloader, _select_audio_format

VIDEO_ID = "aaaaaaaaaaa"
USER_AGENT = "TestAgent/1.0"


class FakeYoutubeDL:
    """YoutubeDLの代替（extract_infoの結果を固定で返す）"""

    def __init__(self, info: dict[str, Any] | None = None, error: Exception | None = None):
        self.info = info
        self.error = error
        self.opts: dict[str, Any] | None = None
        self.urls: list[str] = []

    def __call__(self, opts: dict[str, Any]) -> "FakeYoutubeDL":
        self.opts = opts
        return self

    def __enter__(self) -> "FakeYoutubeDL":
        return self

    def __exit__(self, *exc_info) -> bool:
        return False

    def extract_info(self, url: str, download: bool = True) -> dict[str, Any] | None:
        assert download is False
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.info


class BrokenStream(httpx.SyncByteStream):
    """途中で切断されるストリーム"""

    def __iter__(self):
        yield b"partial-bytes"
        raise httpx.ReadError("connection reset")


def make_metadata(**overrides) -> AudioMetadata:
    values = {
        "video_id": VIDEO_ID,
        "title": "Song",
        "stream_url": "https://media.example.com/audio",
        "ext": "webm",
        "http_headers": {"User-Agent": USER_AGENT, "Accept": "*/*"},
    }
    values.update(overrides)
    return AudioMetadata(**values)


class TestFetchMetadata:
    """メタデータ取得"""

    def test_selected_format(self) -> None:
        """format指定で選ばれたストリームを使う"""
        fake = FakeYoutubeDL(
            info={
                "title": "My Song",
                "url": "https://media.example.com/audio",
                "ext": "m4a",
                "http_headers": {"User-Agent": "yt-dlp", "Accept": "*/*"},
            }
        )
        downloader = YtdlpAudioDownloader(user_agent=USER_AGENT, ydl_factory=fake)

        metadata = downloader.fetch_metadata(VIDEO_ID)

        assert fake.urls == [f"https://www.youtube.com/watch?v={VIDEO_ID}"]
        assert fake.opts["format"] == "bestaudio/best"
        assert fake.opts["http_headers"]["User-Agent"] == USER_AGENT
        assert metadata.title == "My Song"
        assert metadata.stream_url == "https://media.example.com/audio"
        assert metadata.ext == "m4a"
        assert metadata.http_headers == {"User-Agent": USER_AGENT, "Accept": "*/*"}

    def test_download_error(self) -> None:
        """yt-dlpのエラーはDownloadFailedErrorに変換"""
        fake = FakeYoutubeDL(error=yt_dlp.utils.DownloadError("Video unavailable"))
        downloader = YtdlpAudioDownloader(ydl_factory=fake)

        with pytest.raises(DownloadFailedError, match="Video unavailable"):
            downloader.fetch_metadata(VIDEO_ID)

    def test_no_info(self) -> None:
        downloader = YtdlpAudioDownloader(ydl_factory=FakeYoutubeDL(info=None))
        with pytest.raises(DownloadFailedError):
            downloader.fetch_metadata(VIDEO_ID)

    def test_no_audio_stream(self) -> None:
        fake = FakeYoutubeDL(info={"title": "x", "formats": [{"url": "u", "acodec": "none"}]})
        with pytest.raises(DownloadFailedError, match="No audio stream"):
            YtdlpAudioDownloader(ydl_factory=fake).fetch_metadata(VIDEO_ID)


class TestSelectAudioFormat:
    def test_prefers_audio_only_highest_bitrate(self) -> None:
        info = {
            "formats": [
                {"url": "muxed", "acodec": "mp4a", "vcodec": "avc1", "tbr": 900},
                {"url": "low", "acodec": "opus", "vcodec": "none", "abr": 50},
                {"url": "high", "acodec": "opus", "vcodec": "none", "abr": 160},
            ]
        }
        assert _select_audio_format(info)["url"] == "high"

    def test_falls_back_to_muxed(self) -> None:
        info = {"formats": [{"url": "muxed", "acodec": "mp4a", "vcodec": "avc1"}]}
        assert _select_audio_format(info)["url"] == "muxed"


class TestDownload:
    """音声の保存"""

    def test_streams_to_file(self, tmp_path: Path) -> None:
        seen_headers = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen_headers.update(request.headers)
            return httpx.Response(200, content=b"x" * 100_000)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        downloader = YtdlpAudioDownloader(user_agent=USER_AGENT, chunk_size=4096, client=client)
        output = tmp_path / "full.webm"

        result = downloader.download(make_metadata(), output)

        assert result == output
        assert output.read_bytes() == b"x" * 100_000
        assert seen_headers["user-agent"] == USER_AGENT

    def test_http_error_removes_file(self, tmp_path: Path) -> None:
        """HTTPエラー時はファイルを残さない"""
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(403)))
        output = tmp_path / "full.webm"

        with pytest.raises(DownloadFailedError, match="403"):
            YtdlpAudioDownloader(client=client).download(make_metadata(), output)
        assert not output.exists()

    def test_broken_stream_discards_partial(self, tmp_path: Path) -> None:
        """途中で切れたら部分ファイルを削除（再開はしない）"""
        client = httpx.Client(
            transport=httpx.MockTransport(lambda r: httpx.Response(200, stream=BrokenStream()))
        )
        output = tmp_path / "full.webm"

        with pytest.raises(DownloadFailedError, match="connection reset"):
            YtdlpAudioDownloader(client=client).download(make_metadata(), output)
        assert not output.exists()

    def test_empty_stream(self, tmp_path: Path) -> None:
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, content=b"")))
        output = tmp_path / "full.webm"

        with pytest.raises(DownloadFailedError, match="Empty"):
            YtdlpAudioDownloader(client=client).download(make_metadata(), output)
        assert not output.exists()
