# src/protoview/parser/prototype_parser.py
from __future__ import annotations

from typing import List, Optional, Tuple

from protoview.errors import (
    MalformedLine,
    PrototypeError,
    UnknownFileKind,
    UnsupportedDirective,
)
from protoview.models.prototype_line import PrototypeLine
from protoview.models.prototype_record import PrototypeRecord
from protoview.schema_registry import (
    FIELD_DECODERS,
    get_schema,
    is_file_kind,
    line_pattern,
)

COMMENT_PREFIX = "#"
DIRECTIVE_PREFIX = "!"


def _split_part(line: str) -> Tuple[Optional[str], str]:
    """
    先頭の part トークンを切り離す。

    先頭トークンが種別ならそのまま (part なし)。
    2番目のトークンが種別なら、先頭トークンを part とみなす。
    どちらでもなければ UnknownFileKind。
    """
    first, _, rest = line.partition(" ")
    if is_file_kind(first):
        return None, line

    second = rest.partition(" ")[0]
    if first and not any(ch.isspace() for ch in first) and is_file_kind(second):
        return first, rest

    raise UnknownFileKind(first)


def parse_prototype_line(line: str) -> PrototypeRecord:
    """
    prototype(4) の1行を解析してレコードを返す。

    - '!' で始まる行: UnsupportedDirective
    - 種別が不明: UnknownFileKind
    - 種別ごとの文法に合わない: MalformedLine
    """
    if line.startswith(DIRECTIVE_PREFIX):
        raise UnsupportedDirective(line)

    part, body = _split_part(line)
    file_kind = body.partition(" ")[0]
    schema = get_schema(file_kind)

    m = line_pattern(file_kind).match(body)
    if m is None:
        raise MalformedLine(line)

    values = {}
    for name in schema.fields:
        token = m.group(name)
        decode = FIELD_DECODERS.get(name)
        values[name] = decode(token) if decode else token

    return schema.record_type(file_kind=file_kind, part=part, **values)


def parse_prototype_text(text: str, strict: bool = False) -> List[PrototypeLine]:
    """
    prototype ファイル全体を行単位に分割し、PrototypeLine のリストに変換する。

    空行と '#' で始まるコメント行は読み飛ばす。
    strict=False のときは解析エラーを行に記録して続行し、
    strict=True のときは最初のエラーを行番号付きでそのまま送出する。
    """
    lines: List[PrototypeLine] = []

    for idx, line in enumerate(text.splitlines(), start=1):
        raw = line.rstrip()
        if not raw.strip() or raw.lstrip().startswith(COMMENT_PREFIX):
            continue

        try:
            record = parse_prototype_line(raw)
        except PrototypeError as exc:
            if strict:
                exc.line_no = idx
                raise
            lines.append(PrototypeLine(line_no=idx, raw=raw, error=exc.message))
            continue

        lines.append(PrototypeLine(line_no=idx, raw=raw, record=record))

    return lines
