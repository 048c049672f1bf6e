"""YouTube URLから動画IDを抽出"""

import re

# watch?v= / embed / v / e / youtu.be / 任意パス+v= の全形式を1パターンで扱う
_VIDEO_ID_PATTERN = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)"
    r"([^\"&?/\s]{11})",
    re.IGNORECASE,
)

WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"


def extract_video_id(url: str) -> str | None:
    """
    URLから11文字の動画IDを抽出

    Args:
        url: YouTube動画URL（watch / 短縮 / embed 形式）

    Returns:
        動画ID、抽出できない場合はNone
    """
    match = _VIDEO_ID_PATTERN.search(url)
    return match.group(1) if match else None


def canonical_watch_url(video_id: str) -> str:
    """動画IDから標準のwatch URLを組み立て"""
    return WATCH_URL_TEMPLATE.format(video_id=video_id)
