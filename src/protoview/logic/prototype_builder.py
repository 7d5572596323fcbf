# src/protoview/logic/prototype_builder.py
"""
ファイルシステム上のノードから prototype レコードを作る。

属性 (種別・mode・所有者など) は常に query_path から取り、
行に書く pathname だけを display_path に差し替えられる。
pkgmk(1M) で「/opt/MYpkg/foo に入るファイルを ./foo から作る」場合は

    build_record_from_path("/opt/MYpkg/foo", "/opt/MYpkg/foo=./foo")

のように呼ぶ。合成されたパス文字列の中身は検証しない。
"""

from __future__ import annotations

import logging
import os
import posixpath
from typing import Callable, Dict, Iterator, List, Optional

from protoview.config import PrototypeDefaults
from protoview.errors import UnsupportedFileType
from protoview.fs_metadata import (
    FileMetadataProvider,
    LocalFileMetadataProvider,
    NodeType,
    PathLike,
)
from protoview.logic.prototype_validator import is_valid
from protoview.models.prototype_record import PrototypeRecord
from protoview.schema_registry import get_schema

logger = logging.getLogger(__name__)

# パーミッションは下位12ビット (setuid/setgid/sticky 含む) だけ保持する
MODE_MASK = 0o7777

_KIND_BY_NODE_TYPE: Dict[NodeType, str] = {
    NodeType.BLOCK_DEVICE: "b",
    NodeType.CHARACTER_DEVICE: "c",
    NodeType.DIRECTORY: "d",
    NodeType.REGULAR_FILE: "f",
    NodeType.NAMED_PIPE: "p",
    NodeType.SYMBOLIC_LINK: "s",
}


def _file_kind_for(provider: FileMetadataProvider, path: PathLike) -> str:
    # リンク先ではなくリンクそのものを記録する (種別判定より優先)
    if provider.is_symlink(path):
        return "s"
    file_kind = _KIND_BY_NODE_TYPE.get(provider.classify(path))
    if file_kind is None:
        raise UnsupportedFileType(path)
    return file_kind


def build_record_from_path(
    query_path: PathLike,
    display_path: Optional[str] = None,
    *,
    provider: Optional[FileMetadataProvider] = None,
    defaults: Optional[PrototypeDefaults] = None,
) -> PrototypeRecord:
    """
    query_path のメタデータから PrototypeRecord を作る。

    - 種別に対応しないノード (ソケットなど) は UnsupportedFileType
    - provider の OSError はそのまま送出する
    - install_class / part は defaults の値になる
    """
    provider = provider or LocalFileMetadataProvider()
    defaults = defaults or PrototypeDefaults()

    file_kind = _file_kind_for(provider, query_path)
    schema = get_schema(file_kind)

    getters: Dict[str, Callable[[], object]] = {
        "install_class": lambda: defaults.install_class,
        "pathname": lambda: display_path if display_path is not None else os.fspath(query_path),
        "major": lambda: provider.dev_major(query_path),
        "minor": lambda: provider.dev_minor(query_path),
        "mode": lambda: provider.mode(query_path) & MODE_MASK,
        "owner": lambda: provider.owner_name(query_path),
        "group": lambda: provider.group_name(query_path),
    }
    values = {name: getters[name]() for name in schema.fields}

    return schema.record_type(file_kind=file_kind, part=defaults.part, **values)


def _walk(provider: FileMetadataProvider, path: str) -> Iterator[str]:
    """path 自身 → 子要素 (名前順) の順に辿る。シンボリックリンクは辿らない。"""
    yield path
    if provider.is_symlink(path) or provider.classify(path) != NodeType.DIRECTORY:
        return
    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        # 読めないディレクトリは中身を飛ばして続行する
        logger.warning("skipping contents of %s: %s", path, e)
        return
    for name in names:
        yield from _walk(provider, os.path.join(path, name))


def build_records_for_tree(
    root: PathLike,
    *,
    display_root: Optional[str] = None,
    provider: Optional[FileMetadataProvider] = None,
    defaults: Optional[PrototypeDefaults] = None,
) -> List[PrototypeRecord]:
    """
    root 以下のすべてのノードについてレコードを作る (pkgproto 相当)。

    display_root を指定すると pathname は
    "display_root/相対パス=実際のパス" の形になる。
    対応しない種別のノードや、1行に書けないパス (空白を含むなど) は
    警告を出して読み飛ばす。
    """
    provider = provider or LocalFileMetadataProvider()
    root_str = os.fspath(root)
    records: List[PrototypeRecord] = []

    for path in _walk(provider, root_str):
        display_path: Optional[str] = None
        if display_root is not None:
            rel = os.path.relpath(path, root_str)
            target = display_root if rel == "." else posixpath.join(
                display_root, rel.replace(os.sep, "/")
            )
            display_path = f"{target}={path}"

        try:
            record = build_record_from_path(
                path, display_path, provider=provider, defaults=defaults
            )
        except UnsupportedFileType:
            logger.warning("skipping %s: unsupported file type", path)
            continue

        if not is_valid(record):
            logger.warning("skipping %s: cannot be written as a prototype line", path)
            continue

        records.append(record)

    logger.info("built %d prototype records under %s", len(records), root_str)
    return records
