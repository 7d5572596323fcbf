# src/protoview/models/prototype_line.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from protoview.models.prototype_record import PrototypeRecord


@dataclass
class PrototypeLine:
    """
    prototype ファイルの1行分を表すモデル。

    - line_no: 元ファイル上の行番号（1始まり）
    - raw: 1行丸ごとの生テキスト
    - record: 解析できた場合のレコード
    - error: 解析できなかった場合のエラーメッセージ
    """
    line_no: int
    raw: str
    record: Optional[PrototypeRecord] = None
    error: Optional[str] = None

    @property
    def file_kind(self) -> str:
        if self.record is None:
            return "?"
        return self.record.file_kind
