# src/protoview/models/prototype_record.py

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class DeviceRecord:
    """
    ブロック/キャラクタデバイス (b, c) の1行。

    例: "c none /dev/null 13 2 0666 root sys"
    """
    file_kind: str
    install_class: str
    pathname: str
    major: int
    minor: int
    mode: int          # パーミッション (10進で保持、出力時は4桁8進)
    owner: str
    group: str
    part: Optional[str] = None


@dataclass
class NodeRecord:
    """
    ディレクトリ・通常ファイルなど (d, e, f, p, v, x) の1行。

    例: "d none /export/home/martin 0755 mcarpenter staff"
    """
    file_kind: str
    install_class: str
    pathname: str
    mode: int
    owner: str
    group: str
    part: Optional[str] = None


@dataclass
class InfoRecord:
    """
    情報ファイル (i) の1行。pkginfo / depend / postinstall などを指す。
    """
    file_kind: str
    pathname: str
    part: Optional[str] = None


@dataclass
class LinkRecord:
    """
    ハードリンク/シンボリックリンク (l, s) の1行。

    pathname は "リンク=リンク先" の形のまま保持する (分解しない)。
    """
    file_kind: str
    install_class: str
    pathname: str
    part: Optional[str] = None


PrototypeRecord = Union[DeviceRecord, NodeRecord, InfoRecord, LinkRecord]
