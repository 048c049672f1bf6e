"""動画ID抽出のテスト"""

import pytest

from src.domain.video_id import canonical_watch_url, extract_video_id

VIDEO_ID = "dQw4w9WgXcQ"


class TestExtractVideoId:
    """URL形式ごとの抽出"""

    @pytest.mark.parametrize(
        "url",
        [
            f"https://www.youtube.com/watch?v={VIDEO_ID}",
            f"https://youtube.com/watch?v={VIDEO_ID}&t=42s",
            f"https://www.youtube.com/watch?feature=share&v={VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}?si=abcdef",
            f"https://www.youtube.com/embed/{VIDEO_ID}",
            f"https://www.youtube.com/embed/{VIDEO_ID}?start=10",
            f"https://www.youtube.com/v/{VIDEO_ID}",
            f"https://m.youtube.com/watch?v={VIDEO_ID}",
            f"HTTPS://WWW.YOUTUBE.COM/watch?v={VIDEO_ID}",
        ],
    )
    def test_known_shapes(self, url: str) -> None:
        """既知の形式はすべて同じIDになる"""
        assert extract_video_id(url) == VIDEO_ID

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/watch?v=dQw4w9WgXcQ",
            "https://vimeo.com/123456789",
            "not a url",
            "https://youtu.be/short",
            "",
        ],
    )
    def test_unresolved(self, url: str) -> None:
        """YouTube以外・IDが短い場合はNone"""
        assert extract_video_id(url) is None


class TestCanonicalWatchUrl:
    def test_watch_url(self) -> None:
        assert canonical_watch_url(VIDEO_ID) == f"https://www.youtube.com/watch?v={VIDEO_ID}"
