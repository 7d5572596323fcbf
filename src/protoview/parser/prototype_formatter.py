# src/protoview/parser/prototype_formatter.py
from __future__ import annotations

from typing import Iterable

from protoview.errors import RecordShapeError
from protoview.models.prototype_record import PrototypeRecord
from protoview.schema_registry import FIELD_ENCODERS, INTEGER_FIELDS, get_schema


def _format_field(record: PrototypeRecord, name: str) -> str:
    value = getattr(record, name)

    if name in INTEGER_FIELDS:
        # bool は int の派生なので明示的に弾く
        if isinstance(value, bool) or not isinstance(value, int):
            raise RecordShapeError(f"{name} must be an integer, got {value!r}")
        return FIELD_ENCODERS[name](value)

    if not isinstance(value, str):
        raise RecordShapeError(f"{name} must be a string, got {value!r}")
    return value


def format_prototype_record(record: PrototypeRecord) -> str:
    """
    レコードを prototype(4) の1行に変換する。

    part があれば先頭に付ける。改行は付けない。
    種別が不明なら UnknownFileKind、種別とレコードの型が食い違っていれば
    RecordShapeError。
    """
    file_kind = getattr(record, "file_kind", None)
    schema = get_schema(file_kind)

    if not isinstance(record, schema.record_type):
        raise RecordShapeError(
            f"{type(record).__name__} cannot hold file type {file_kind!r}"
        )

    tokens = []
    part = getattr(record, "part", None)
    if part is not None:
        # 読み直すと文字列になるので、文字列以外は受け付けない
        if not isinstance(part, str):
            raise RecordShapeError(f"part must be a string, got {part!r}")
        tokens.append(part)
    tokens.append(file_kind)
    tokens.extend(_format_field(record, name) for name in schema.fields)
    return " ".join(tokens)


def format_prototype_text(records: Iterable[PrototypeRecord]) -> str:
    """複数レコードを改行区切りのテキストにする (末尾にも改行を付ける)。"""
    lines = [format_prototype_record(r) for r in records]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
