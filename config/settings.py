"""設定管理"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """アプリケーション設定"""

    # Output defaults（CLI引数で上書き可能）
    DEFAULT_OUTPUT: str = "merged_audio.mp3"
    DEFAULT_FORMAT: str = "mp3"
    DEFAULT_BITRATE: str = "128k"

    # Download
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    DOWNLOAD_CHUNK_SIZE: int = 64 * 1024

    # Timeouts (seconds)
    DOWNLOAD_TIMEOUT: int = 60
    TRIM_TIMEOUT: int = 300
    MERGE_TIMEOUT: int = 1800

    # Paths
    TEMP_DIR: str = "temp_audio_files"
    FFMPEG_PATH: str = "ffmpeg"

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """シングルトンで設定を取得"""
    return Settings()
