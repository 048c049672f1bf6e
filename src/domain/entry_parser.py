"""入力テキストのパース（URL 開始 終了）"""

from src.domain.entities import Entry

# 1行あたりの必須フィールド数（URL, 開始, 終了）
REQUIRED_FIELDS = 3

ENTRY_FORMAT_HINT = "URL START_TIME END_TIME"


def parse_entry_line(line: str) -> Entry | None:
    """
    1行をEntryに変換

    フィールドが3つ未満ならNone。4つ目以降は無視する。
    """
    parts = line.strip().split()
    if len(parts) < REQUIRED_FIELDS:
        return None
    return Entry(source=parts[0], start=parts[1], end=parts[2])


def parse_entries_text(text: str) -> list[Entry]:
    """
    テキスト全体をEntryのリストに変換

    空行はスキップ、フィールド不足の行は黙って捨てる。
    入力順は保持する（結合順になるため）。
    """
    entries = []
    for line in text.splitlines():
        if not line.strip():
            continue
        entry = parse_entry_line(line)
        if entry is not None:
            entries.append(entry)
    return entries
