from __future__ import annotations

import pytest

from protoview.logic.prototype_validator import is_valid, validate_lines
from protoview.models.prototype_record import DeviceRecord, LinkRecord, NodeRecord
from protoview.parser.prototype_parser import parse_prototype_line, parse_prototype_text


def test_valid_after_kind_changes():
    proto = parse_prototype_line("f none /export/home/martin/.profile 0755 mcarpenter staff")
    assert is_valid(proto)
    proto.file_kind = "invalid"
    assert not is_valid(proto)
    proto.file_kind = "d"
    assert is_valid(proto)


def test_kind_from_another_shape_is_invalid():
    proto = parse_prototype_line("d none /opt 0755 root bin")
    proto.file_kind = "c"
    assert not is_valid(proto)


@pytest.mark.parametrize(
    "changes",
    [
        {"mode": 0o10000},          # 5桁になる
        {"mode": -1},
        {"mode": "0755"},
        {"owner": "two words"},
        {"pathname": ""},
        {"install_class": "x" * 13},
        {"group": None},
    ],
)
def test_invalid_field_values(changes):
    proto = NodeRecord(
        file_kind="f", install_class="none", pathname="/x", mode=0o644, owner="root", group="bin"
    )
    for name, value in changes.items():
        setattr(proto, name, value)
    assert not is_valid(proto)


def test_part_with_space_is_invalid():
    proto = LinkRecord(file_kind="s", install_class="none", pathname="/a=/b", part="my part")
    assert not is_valid(proto)


def test_negative_device_number_is_invalid():
    proto = DeviceRecord(
        file_kind="c", install_class="none", pathname="/dev/null",
        major=-13, minor=2, mode=0o666, owner="root", group="sys",
    )
    assert not is_valid(proto)


def test_is_valid_never_raises_on_foreign_objects():
    assert not is_valid(object())


def test_validate_lines():
    lines = parse_prototype_text("i pkginfo\nf broken\nd none /opt 0755 root bin\n")
    lines[2].record.mode = "bad"

    bad = validate_lines(lines)
    assert [line.line_no for line in bad] == [2, 3]


def test_integer_part_is_invalid():
    proto = LinkRecord(file_kind="s", install_class="none", pathname="/a=/b", part=2)
    assert not is_valid(proto)
