from __future__ import annotations

import pytest

from protoview.errors import (
    MalformedLine,
    PrototypeError,
    UnknownFileKind,
    UnsupportedDirective,
)
from protoview.models.prototype_record import (
    DeviceRecord,
    InfoRecord,
    LinkRecord,
    NodeRecord,
)
from protoview.parser.prototype_formatter import format_prototype_record
from protoview.parser.prototype_parser import parse_prototype_line, parse_prototype_text


def test_character_device():
    line = "c none /dev/null 13 2 0666 root sys"
    proto = parse_prototype_line(line)

    assert proto == DeviceRecord(
        file_kind="c",
        install_class="none",
        pathname="/dev/null",
        major=13,
        minor=2,
        mode=438,
        owner="root",
        group="sys",
    )
    assert proto.part is None
    assert format_prototype_record(proto) == line


def test_symbolic_link_keeps_composite_path():
    line = "s none /etc/hosts=./inet/hosts"
    proto = parse_prototype_line(line)

    assert isinstance(proto, LinkRecord)
    assert proto.file_kind == "s"
    assert proto.install_class == "none"
    assert proto.pathname == "/etc/hosts=./inet/hosts"
    for name in ("major", "minor", "mode", "owner", "group"):
        assert not hasattr(proto, name)
    assert format_prototype_record(proto) == line


def test_directory():
    line = "d none /export/home/martin 0755 mcarpenter staff"
    proto = parse_prototype_line(line)

    assert isinstance(proto, NodeRecord)
    assert proto.file_kind == "d"
    assert proto.pathname == "/export/home/martin"
    assert proto.mode == 493
    assert proto.owner == "mcarpenter"
    assert proto.group == "staff"
    assert not hasattr(proto, "major")
    assert format_prototype_record(proto) == line


def test_file():
    line = "f none /export/home/martin/.profile 0755 mcarpenter staff"
    proto = parse_prototype_line(line)

    assert proto.file_kind == "f"
    assert proto.pathname == "/export/home/martin/.profile"
    assert proto.mode == 0o755


def test_info_file():
    proto = parse_prototype_line("i pkginfo")
    assert proto == InfoRecord(file_kind="i", pathname="pkginfo")
    assert not hasattr(proto, "install_class")


def test_info_with_source_path():
    proto = parse_prototype_line("i postinstall=./scripts/postinstall")
    assert proto.pathname == "postinstall=./scripts/postinstall"


@pytest.mark.parametrize(
    "line",
    [
        "b none /dev/dsk/c0t0d0s0 32 0 0640 root sys",
        "c none /dev/null 13 2 0666 root sys",
        "d none /export/home/martin 0755 mcarpenter staff",
        "e build /etc/inet/hosts 0644 root sys",
        "f none /export/home/martin/.profile 0755 mcarpenter staff",
        "p none /var/run/fifo 0600 root root",
        "v none /var/adm/messages 0644 root sys",
        "x none /var/spool/pkg 4755 root bin",
        "i pkginfo",
        "l none /usr/bin/ls=/bin/ls",
        "s none /etc/hosts=./inet/hosts",
        "1 f none /opt/MYpkg/bin/tool 0555 root bin",
        "part d none /opt/MYpkg 0755 root bin",
    ],
)
def test_canonical_lines_round_trip(line):
    assert format_prototype_record(parse_prototype_line(line)) == line


def test_mode_is_read_as_octal():
    proto = parse_prototype_line("f none /tmp/x 0666 root sys")
    assert proto.mode == 438
    assert format_prototype_record(proto).split()[4] == "0666"


def test_setuid_mode():
    proto = parse_prototype_line("f none /usr/bin/passwd 6555 root sys")
    assert proto.mode == 0o6555


def test_leading_part_token():
    proto = parse_prototype_line("part f none /export/home/martin/.profile 0755 mcarpenter staff")
    assert proto.part == "part"
    assert proto.file_kind == "f"
    assert proto.pathname == "/export/home/martin/.profile"


def test_kind_first_is_never_read_as_part():
    with pytest.raises(MalformedLine):
        parse_prototype_line("f d none /opt 0755 root bin")


def test_unknown_file_kind():
    with pytest.raises(UnknownFileKind) as excinfo:
        parse_prototype_line("X none /export/home/martin/.profile 0755 mcarpenter staff")
    assert excinfo.value.file_kind == "X"


@pytest.mark.parametrize("line", ["", " f none /x 0644 root sys", "file none /x 0644 a b"])
def test_lines_without_kind_token(line):
    with pytest.raises(UnknownFileKind):
        parse_prototype_line(line)


def test_unparseable_line():
    with pytest.raises(MalformedLine) as excinfo:
        parse_prototype_line("f nonsense")
    assert excinfo.value.line == "f nonsense"


@pytest.mark.parametrize(
    "line",
    [
        "!search /usr/bin",
        "!include common.proto",
        "!PKGNAME=SUNWfoo",
        "!f none /x 0644 root sys",
    ],
)
def test_directive_lines_are_rejected(line):
    with pytest.raises(UnsupportedDirective):
        parse_prototype_line(line)


@pytest.mark.parametrize(
    "line",
    [
        "d none /x 755 root sys",           # 3桁
        "d none /x 0855 root sys",          # 8進でない
        "d none /x 0755 root",              # group なし
        "d none /x 0755 root sys extra",    # 余計なフィールド
        "d abcdefghijklm /x 0755 root sys", # class が13文字
        "d nöne /x 0755 root sys",          # class は ASCII のみ
        "c none /dev/null 13 0666 root sys",
        "c none /dev/null x 2 0666 root sys",
        "s none",
        "i",
    ],
)
def test_malformed_lines(line):
    with pytest.raises(MalformedLine):
        parse_prototype_line(line)


def test_link_tolerates_trailing_content():
    proto = parse_prototype_line("s none /etc/hosts=./inet/hosts trailing words")
    assert proto.pathname == "/etc/hosts=./inet/hosts"


def test_info_tolerates_trailing_content():
    proto = parse_prototype_line("i copyright whatever")
    assert proto.pathname == "copyright"


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_prototype_line("Q none /x")
    assert issubclass(MalformedLine, PrototypeError)


def test_parse_text_skips_blank_and_comment_lines():
    text = (
        "# packaging prototype\n"
        "\n"
        "i pkginfo\n"
        "   # indented comment\n"
        "d none /opt/MYpkg 0755 root bin\r\n"
        "f none /opt/MYpkg/README 0644 root bin   \n"
    )
    lines = parse_prototype_text(text)

    assert [line.line_no for line in lines] == [3, 5, 6]
    assert [line.file_kind for line in lines] == ["i", "d", "f"]
    assert all(line.error is None for line in lines)
    assert lines[2].raw == "f none /opt/MYpkg/README 0644 root bin"


def test_parse_text_records_errors():
    text = "d none /opt 0755 root bin\n!search /usr\nf broken\n"
    lines = parse_prototype_text(text)

    assert len(lines) == 3
    assert lines[0].record is not None
    assert lines[1].record is None
    assert "not supported" in lines[1].error
    assert lines[2].file_kind == "?"
    assert "Could not parse" in lines[2].error


def test_parse_text_strict_reports_line_number():
    text = "d none /opt 0755 root bin\n\nf broken\n"
    with pytest.raises(MalformedLine) as excinfo:
        parse_prototype_text(text, strict=True)
    assert excinfo.value.line_no == 3
    assert str(excinfo.value).startswith("line 3: ")
