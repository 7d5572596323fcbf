# src/protoview/prototype_loader.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

import chardet

from protoview.models.prototype_line import PrototypeLine
from protoview.models.prototype_record import PrototypeRecord
from protoview.parser.prototype_formatter import format_prototype_text
from protoview.parser.prototype_parser import parse_prototype_text

logger = logging.getLogger(__name__)

FALLBACK_ENCODING = "latin-1"


@dataclass
class PrototypeFile:
    """読み込んだ prototype ファイル1つ分。"""
    path: Path
    encoding: str
    lines: List[PrototypeLine] = field(default_factory=list)

    @property
    def records(self) -> List[PrototypeRecord]:
        """解析できた行のレコードだけを行順に返す。"""
        return [line.record for line in self.lines if line.record is not None]

    @property
    def errors(self) -> List[PrototypeLine]:
        return [line for line in self.lines if line.record is None]


def _decode_text(raw: bytes) -> Tuple[str, str]:
    """
    バイト列をテキスト化し、(テキスト, エンコーディング名) を返す。

    - まず UTF-8 (BOM 付き含む) を試す
    - だめなら chardet の推定結果
    - 最後の保険として latin-1 (どのバイト列でも失敗しない)
    """
    try:
        return raw.decode("utf-8-sig"), "utf-8"
    except UnicodeDecodeError:
        pass

    guess = chardet.detect(raw)
    enc = guess.get("encoding")
    if enc:
        try:
            return raw.decode(enc), enc
        except (UnicodeDecodeError, LookupError):
            logger.debug("chardet guess %s failed to decode", enc)

    return raw.decode(FALLBACK_ENCODING), FALLBACK_ENCODING


def load_prototype_file(path: Path, strict: bool = False) -> PrototypeFile:
    """
    prototype ファイルを読み込んで行ごとに解析する。

    strict=True なら最初の解析エラーで PrototypeError (line_no 付き) を送出。
    読み込みの OSError はそのまま送出する。
    """
    raw = Path(path).read_bytes()
    text, encoding = _decode_text(raw)
    lines = parse_prototype_text(text, strict=strict)

    proto = PrototypeFile(path=Path(path), encoding=encoding, lines=lines)
    logger.info(
        "loaded %s (%s): %d lines, %d errors",
        path, encoding, len(proto.lines), len(proto.errors),
    )
    return proto


def save_prototype_file(path: Path, records: Iterable[PrototypeRecord]) -> None:
    """レコードを1行ずつ UTF-8 で書き出す。"""
    text = format_prototype_text(records)
    Path(path).write_text(text, encoding="utf-8")
    logger.info("saved %s", path)
