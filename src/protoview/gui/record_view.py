# src/protoview/gui/record_view.py
"""
ビューアの一覧・詳細ペインに出す文字列を組み立てるヘルパ。

Qt に依存しないので単体でテストできる。
"""

from __future__ import annotations

from typing import List, Sequence

from protoview.code_tables import field_label_map, file_kind_map
from protoview.logic.prototype_validator import is_valid
from protoview.models.prototype_line import PrototypeLine
from protoview.schema_registry import INTEGER_FIELDS, get_schema

SUMMARY_WIDTH = 60
MARK_OK = "✓"
MARK_NG = "✗"


def kind_label(file_kind: str) -> str:
    """'f' -> 'f (通常ファイル)'。未知の種別はそのまま。"""
    label = file_kind_map().get(file_kind)
    return f"{file_kind} ({label})" if label else file_kind


def _format_value(name: str, value: object) -> str:
    if name == "mode" and isinstance(value, int):
        return f"{value:04o} ({value})"
    if name in INTEGER_FIELDS:
        return str(value)
    return "" if value is None else str(value)


def is_line_ok(line: PrototypeLine) -> bool:
    return line.record is not None and is_valid(line.record)


def summarize_line(line: PrototypeLine) -> str:
    """
    一覧用の1行表示。

    例: "00003 [f] ✓ f none /etc/motd 0644 root sys"
    """
    summary = line.raw.replace("\t", "    ").strip()
    if len(summary) > SUMMARY_WIDTH:
        summary = summary[:SUMMARY_WIDTH] + "…"
    mark = MARK_OK if is_line_ok(line) else MARK_NG
    return f"{line.line_no:05d} [{line.file_kind}] {mark} {summary}"


def describe_line(line: PrototypeLine) -> List[str]:
    """詳細ペインに出す行のリスト。"""
    labels = field_label_map()
    lines: List[str] = []
    lines.append(f"行番号: {line.line_no}")

    record = line.record
    if record is None:
        lines.append("状態: 解析エラー")
        lines.append(f"エラー: {line.error or '-'}")
        lines.append("")
        lines.append("[生データ]")
        lines.append(line.raw)
        return lines

    lines.append(f"{labels['file_kind']}: {kind_label(record.file_kind)}")
    lines.append(f"状態: {'OK' if is_valid(record) else '不正なレコード'}")
    lines.append("")
    lines.append("[生データ]")
    lines.append(line.raw)
    lines.append("")
    lines.append("[フィールド]")

    if record.part is not None:
        lines.append(f"{labels['part']}: {record.part}")
    for name in get_schema(record.file_kind).fields:
        value = getattr(record, name, None)
        lines.append(f"{labels.get(name, name)}: {_format_value(name, value)}")

    return lines


def search_lines(lines: Sequence[PrototypeLine], keyword: str) -> List[int]:
    """raw テキストに keyword を含む行のインデックス一覧。"""
    if not keyword:
        return []
    return [idx for idx, line in enumerate(lines) if keyword in line.raw]
