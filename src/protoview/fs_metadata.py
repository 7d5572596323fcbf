# src/protoview/fs_metadata.py
"""
ファイルシステムからメタデータ (種別・パーミッション・所有者など) を取るための
インタフェースと、ローカル POSIX 環境向けの実装。

どのメソッドもシンボリックリンクを辿らず、リンクそのものを対象にする。
"""

from __future__ import annotations

import grp
import logging
import os
import pwd
import stat
from enum import Enum
from typing import Protocol, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class NodeType(str, Enum):
    BLOCK_DEVICE = "block_device"
    CHARACTER_DEVICE = "character_device"
    DIRECTORY = "directory"
    REGULAR_FILE = "regular_file"
    NAMED_PIPE = "named_pipe"
    SYMBOLIC_LINK = "symbolic_link"
    UNKNOWN = "unknown"


class FileMetadataProvider(Protocol):
    def classify(self, path: PathLike) -> NodeType: ...

    def is_symlink(self, path: PathLike) -> bool: ...

    def mode(self, path: PathLike) -> int: ...

    def owner_name(self, path: PathLike) -> str: ...

    def group_name(self, path: PathLike) -> str: ...

    def dev_major(self, path: PathLike) -> int: ...

    def dev_minor(self, path: PathLike) -> int: ...


def _node_type_from_mode(st_mode: int) -> NodeType:
    if stat.S_ISLNK(st_mode):
        return NodeType.SYMBOLIC_LINK
    if stat.S_ISDIR(st_mode):
        return NodeType.DIRECTORY
    if stat.S_ISREG(st_mode):
        return NodeType.REGULAR_FILE
    if stat.S_ISBLK(st_mode):
        return NodeType.BLOCK_DEVICE
    if stat.S_ISCHR(st_mode):
        return NodeType.CHARACTER_DEVICE
    if stat.S_ISFIFO(st_mode):
        return NodeType.NAMED_PIPE
    # ソケット・door など
    return NodeType.UNKNOWN


class LocalFileMetadataProvider:
    """os.lstat と pwd/grp を使う実装。失敗時の OSError はそのまま送出する。"""

    def classify(self, path: PathLike) -> NodeType:
        return _node_type_from_mode(os.lstat(path).st_mode)

    def is_symlink(self, path: PathLike) -> bool:
        return stat.S_ISLNK(os.lstat(path).st_mode)

    def mode(self, path: PathLike) -> int:
        return stat.S_IMODE(os.lstat(path).st_mode)

    def owner_name(self, path: PathLike) -> str:
        uid = os.lstat(path).st_uid
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            # passwd にないユーザ (コンテナ内など) は数値のまま
            logger.debug("no passwd entry for uid %s (%s)", uid, path)
            return str(uid)

    def group_name(self, path: PathLike) -> str:
        gid = os.lstat(path).st_gid
        try:
            return grp.getgrgid(gid).gr_name
        except KeyError:
            logger.debug("no group entry for gid %s (%s)", gid, path)
            return str(gid)

    def dev_major(self, path: PathLike) -> int:
        return os.major(os.lstat(path).st_rdev)

    def dev_minor(self, path: PathLike) -> int:
        return os.minor(os.lstat(path).st_rdev)
