"""エントリの読み込み（ファイル / 対話入力）"""

from collections.abc import Callable
from pathlib import Path

from src.domain.entities import Entry
from src.domain.entry_parser import ENTRY_FORMAT_HINT, parse_entries_text, parse_entry_line
from src.domain.exceptions import InputFileError
from src.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

PROMPT = "> "


def read_entries_from_file(path: Path | str) -> list[Entry]:
    """
    入力ファイルからエントリを読み込む

    Raises:
        InputFileError: ファイルが読めない
    """
    input_path = Path(path)
    try:
        text = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"Cannot read input file {input_path}: {e}") from e

    entries = parse_entries_text(text)
    non_blank = sum(1 for line in text.splitlines() if line.strip())
    if non_blank > len(entries):
        logger.debug(
            f"[入力] フィールド不足の行を{non_blank - len(entries)}件スキップ: {input_path}"
        )
    logger.info(f"[入力] {len(entries)}件のエントリを読み込み: {input_path}")
    return entries


def prompt_entries(
    input_func: Callable[[str], str] = input,
    output_func: Callable[[str], None] = print,
) -> list[Entry]:
    """
    対話入力でエントリを受け付ける

    空行（またはEOF）で終了。形式が不正な行はメッセージを出して続行する。
    """
    output_func("Enter YouTube URLs with start and end times (empty line to finish):")
    output_func("Format: https://youtube.com/watch?v=VIDEOID 00:00 02:30")

    entries = []
    while True:
        try:
            line = input_func(PROMPT)
        except EOFError:
            break

        if not line.strip():
            break

        entry = parse_entry_line(line)
        if entry is None:
            output_func(f"Invalid format. Please use: {ENTRY_FORMAT_HINT}")
            continue
        entries.append(entry)

    return entries


def load_entries(
    input_path: Path | str | None,
    input_func: Callable[[str], str] = input,
    output_func: Callable[[str], None] = print,
) -> list[Entry]:
    """入力ファイルがあればファイルから、なければ対話入力で読み込む"""
    if input_path:
        return read_entries_from_file(input_path)
    return prompt_entries(input_func=input_func, output_func=output_func)
