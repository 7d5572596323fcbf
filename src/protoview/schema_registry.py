# src/protoview/schema_registry.py
"""
ファイル種別 (b, c, d, ...) ごとのフィールド構成と文法の対応表。

パーサ・フォーマッタ・メタデータからの生成はすべてこの表を参照する。
フィールド順を他の場所に書き写さないこと。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Tuple

from protoview.errors import UnknownFileKind
from protoview.models.prototype_record import (
    DeviceRecord,
    InfoRecord,
    LinkRecord,
    NodeRecord,
)


# フィールド名 -> 1トークン分の正規表現
FIELD_PATTERNS: Dict[str, str] = {
    "install_class": r"\w{1,12}",
    "pathname": r"\S+",
    "major": r"\d+",
    "minor": r"\d+",
    "mode": r"[0-7]{4}",
    "owner": r"\S+",
    "group": r"\S+",
}

# 文字列 -> 値 (ここにないフィールドは文字列のまま)
FIELD_DECODERS: Dict[str, Callable[[str], object]] = {
    "major": lambda s: int(s, 10),
    "minor": lambda s: int(s, 10),
    "mode": lambda s: int(s, 8),
}

# 値 -> 文字列 (mode は常に4桁0埋めの8進)
FIELD_ENCODERS: Dict[str, Callable[[int], str]] = {
    "major": lambda v: f"{v:d}",
    "minor": lambda v: f"{v:d}",
    "mode": lambda v: f"{v:04o}",
}

INTEGER_FIELDS = frozenset(FIELD_DECODERS)


@dataclass(frozen=True)
class RecordSchema:
    """1種別分の定義。anchored=False の種別は行末に余計な文字があっても通す。"""
    record_type: type
    fields: Tuple[str, ...]
    anchored: bool = True


_DEVICE = RecordSchema(
    DeviceRecord,
    ("install_class", "pathname", "major", "minor", "mode", "owner", "group"),
)
_NODE = RecordSchema(
    NodeRecord,
    ("install_class", "pathname", "mode", "owner", "group"),
)
# i / l / s は行頭だけで照合する (行末の余分な文字は無視)
_INFO = RecordSchema(InfoRecord, ("pathname",), anchored=False)
_LINK = RecordSchema(LinkRecord, ("install_class", "pathname"), anchored=False)

SCHEMAS: Dict[str, RecordSchema] = {
    "b": _DEVICE,   # ブロックデバイス
    "c": _DEVICE,   # キャラクタデバイス
    "d": _NODE,     # ディレクトリ
    "e": _NODE,     # インストール時に編集されるファイル
    "f": _NODE,     # 通常ファイル
    "p": _NODE,     # 名前付きパイプ
    "v": _NODE,     # 内容が変化するファイル (ログなど)
    "x": _NODE,     # 排他ディレクトリ
    "i": _INFO,     # 情報ファイル / インストールスクリプト
    "l": _LINK,     # ハードリンク
    "s": _LINK,     # シンボリックリンク
}

FILE_KINDS: Tuple[str, ...] = tuple(SCHEMAS)


def is_file_kind(value: object) -> bool:
    return isinstance(value, str) and value in SCHEMAS


def get_schema(file_kind: object) -> RecordSchema:
    """種別に対応するスキーマを返す。未知の種別は UnknownFileKind。"""
    if not is_file_kind(file_kind):
        raise UnknownFileKind(file_kind)
    return SCHEMAS[file_kind]  # type: ignore[index]


@lru_cache(maxsize=None)
def line_pattern(file_kind: str) -> "re.Pattern[str]":
    """
    種別ごとの1行分の正規表現を組み立てる。

    例 (d):
        ^d (?P<install_class>\\w{1,12}) (?P<pathname>\\S+) (?P<mode>[0-7]{4}) ...\\Z
    """
    schema = get_schema(file_kind)
    parts = ["^", re.escape(file_kind)]
    for name in schema.fields:
        parts.append(f" (?P<{name}>{FIELD_PATTERNS[name]})")
    if schema.anchored:
        parts.append(r"\Z")
    return re.compile("".join(parts), re.ASCII)
