# src/protoview/config.py
"""
既定値とビューア設定。

- PrototypeDefaults: ファイルシステムからレコードを作るときの既定値
- ~/.protoview_settings.json: 最近開いたファイルなど、ビューアの設定
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# install class を指定しなかったときの値
DEFAULT_INSTALL_CLASS = "none"

# part を指定しなかったときの値。prototype(4) では part 省略は
# "part 1" 扱いだが、行には何も出さない。
DEFAULT_PART: Optional[str] = None

SETTINGS_PATH = Path.home() / ".protoview_settings.json"

MAX_RECENT_FILES = 10


@dataclass(frozen=True)
class PrototypeDefaults:
    install_class: str = DEFAULT_INSTALL_CLASS
    part: Optional[str] = DEFAULT_PART


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    設定 JSON を読み込む。

    ファイルがない・壊れている・トップレベルが dict でない場合は空の dict。
    """
    config_path = path or SETTINGS_PATH
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable settings file %s: %s", config_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    """設定 JSON を書き出す。失敗してもアプリ動作は継続する。"""
    config_path = path or SETTINGS_PATH
    try:
        config_path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
    except OSError as e:
        logger.warning("could not write settings file %s: %s", config_path, e)


def load_defaults(path: Optional[Path] = None) -> PrototypeDefaults:
    """設定ファイルの default_install_class を反映した既定値を返す。"""
    value = load_settings(path).get("default_install_class")
    if isinstance(value, str) and value:
        return PrototypeDefaults(install_class=value)
    return PrototypeDefaults()


def load_recent_files(path: Optional[Path] = None) -> List[Path]:
    raw = load_settings(path).get("recent_files") or []
    if not isinstance(raw, list):
        return []
    return [Path(p) for p in raw if isinstance(p, str) and p]


def add_recent_file(file_path: Path, path: Optional[Path] = None) -> List[Path]:
    """
    最近開いたファイルの先頭に file_path を追加して保存する。

    同じパスは重複させず、MAX_RECENT_FILES 件までに切り詰める。
    """
    data = load_settings(path)
    recent = [p for p in load_recent_files(path) if p != file_path]
    recent.insert(0, file_path)
    recent = recent[:MAX_RECENT_FILES]
    data["recent_files"] = [str(p) for p in recent]
    save_settings(data, path)
    return recent
