"""ドメイン固有の例外定義"""


class AudioMergerError(Exception):
    """基底例外クラス"""

    pass


class UnresolvedSourceError(AudioMergerError):
    """URLから動画IDを抽出できない"""

    pass


class MalformedTimeTokenError(AudioMergerError):
    """時刻表記が不正"""

    def __init__(self, token: str):
        super().__init__(f"Malformed time token: {token!r}")
        self.token = token


class InvalidTimeRangeError(AudioMergerError):
    """時間範囲が不正（終了 <= 開始 など）"""

    pass


class DownloadFailedError(AudioMergerError):
    """音声のダウンロード失敗"""

    pass


class TrimFailedError(AudioMergerError):
    """クリップ切り出し失敗"""

    pass


class MergeFailedError(AudioMergerError):
    """クリップ結合失敗"""

    pass


class NothingToMergeError(AudioMergerError):
    """結合対象のクリップがない"""

    pass


class CollaboratorUnavailableError(AudioMergerError):
    """外部ツール（ffmpeg）が利用できない"""

    pass


class InputFileError(AudioMergerError):
    """入力ファイルを読み込めない"""

    pass
