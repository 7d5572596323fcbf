# src/protoview/code_tables.py

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Dict

# 表示ラベルの表名 -> data/ 以下のファイル名
_TABLE_FILES: Dict[str, str] = {
    "file_kind": "file_kinds.json",
    "field_label": "field_labels.json",
}


@lru_cache(maxsize=None)
def load_code_table(table_name: str) -> Dict[str, str]:
    """
    protoview/data/ の JSON ({"コード": "ラベル", ...}) を dict で返す。

    未知の表名は KeyError、dict 以外の JSON は ValueError。
    """
    filename = _TABLE_FILES.get(table_name)
    if filename is None:
        raise KeyError(f"Unknown table name: {table_name}")

    text = resources.files("protoview.data").joinpath(filename).read_text(encoding="utf-8")
    raw = json.loads(text)
    if not isinstance(raw, dict):
        raise ValueError(f"{filename} must be a JSON object")
    return {str(code): str(label) for code, label in raw.items()}


def file_kind_map() -> Dict[str, str]:
    return load_code_table("file_kind")


def field_label_map() -> Dict[str, str]:
    return load_code_table("field_label")
