"""時間変換ユーティリティ"""

from src.domain.exceptions import MalformedTimeTokenError


def parse_time_token(token: str) -> int:
    """
    時刻表記を秒数に変換

    対応フォーマット:
        - "H:M:S" → H*3600 + M*60 + S
        - "M:S"   → M*60 + S
        - "S"     → S

    Args:
        token: 時刻表記（例: "02:30", "01:02:03", "45"）

    Returns:
        秒数（0以上の整数）

    Raises:
        MalformedTimeTokenError: 上記以外の形式

    Example:
        parse_time_token("02:30")     # → 150
        parse_time_token("01:02:03")  # → 3723
    """
    parts = token.strip().split(":")
    if len(parts) > 3:
        raise MalformedTimeTokenError(token)

    # ASCII数字のみ許可（"1.5" や "-3"、"²" などのUnicode数字、空セグメントは不正）
    if not all(part.isascii() and part.isdigit() for part in parts):
        raise MalformedTimeTokenError(token)

    seconds = 0
    for part in parts:
        seconds = seconds * 60 + int(part)
    return seconds


def format_seconds(seconds: int) -> str:
    """秒をM:SS（1時間以上はH:MM:SS）形式に変換"""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
