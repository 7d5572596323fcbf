# src/protoview/errors.py
"""
prototype(4) 行の解析・生成で発生する例外。

すべて PrototypeError (ValueError の派生) を基底とし、
呼び出し側は PrototypeError だけ捕まえれば足りるようにしている。
"""

from __future__ import annotations

from typing import Optional


class PrototypeError(ValueError):
    """prototype 関連の例外の基底クラス。"""

    def __init__(self, message: str, line_no: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_no = line_no  # テキスト一括解析時のみ設定される (1始まり)

    def __str__(self) -> str:
        if self.line_no is not None:
            return f"line {self.line_no}: {self.message}"
        return self.message


class UnknownFileKind(PrototypeError):
    """ファイル種別 (先頭の1文字) がスキーマに存在しない。"""

    def __init__(self, file_kind: object, line_no: Optional[int] = None) -> None:
        super().__init__(f"Unknown file type {file_kind!r}", line_no)
        self.file_kind = file_kind


class UnsupportedDirective(PrototypeError):
    """'!' で始まるコマンド行 (!include, !search など)。"""

    def __init__(self, line: str, line_no: Optional[int] = None) -> None:
        super().__init__(f"Prototype commands not supported {line!r}", line_no)
        self.line = line


class MalformedLine(PrototypeError):
    """種別は分かったが、残りのフィールドが文法に合わない。"""

    def __init__(self, line: str, line_no: Optional[int] = None) -> None:
        super().__init__(f"Could not parse line {line!r}", line_no)
        self.line = line


class UnsupportedFileType(PrototypeError):
    """ファイルシステム上のノード種別に対応する prototype 種別がない。"""

    def __init__(self, path: object, line_no: Optional[int] = None) -> None:
        super().__init__(f"Unknown file type at {str(path)!r}", line_no)
        self.path = path


class RecordShapeError(PrototypeError):
    """レコードの中身が種別のフィールド構成と食い違っている (書き換え後など)。"""
