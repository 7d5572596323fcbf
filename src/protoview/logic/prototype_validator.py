# src/protoview/logic/prototype_validator.py

from __future__ import annotations

from typing import Iterable, List

from protoview.errors import PrototypeError
from protoview.models.prototype_line import PrototypeLine
from protoview.models.prototype_record import PrototypeRecord
from protoview.parser.prototype_formatter import format_prototype_record
from protoview.parser.prototype_parser import parse_prototype_line


def is_valid(record: PrototypeRecord) -> bool:
    """
    レコードが正しい prototype 行として成立するかどうか。

    1行に書き出して読み直せれば True。フィールドごとの個別チェックはせず、
    パーサとフォーマッタの往復そのものを妥当性の定義にしている。
    """
    try:
        parse_prototype_line(format_prototype_record(record))
    except PrototypeError:
        return False
    return True


def validate_lines(lines: Iterable[PrototypeLine]) -> List[PrototypeLine]:
    """解析エラーの行と、レコードが不正になっている行だけを返す。"""
    bad: List[PrototypeLine] = []
    for line in lines:
        if line.record is None or not is_valid(line.record):
            bad.append(line)
    return bad
