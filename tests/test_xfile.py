import pytest

from dissrc.xfile import XHeader, ZHeader


def _sample_x():
    return XHeader(
        head=0x4855,
        mode=1,
        base=0x1000,
        exec=0x1010,
        text=0x200,
        data=0x40,
        bss=0x80,
        offset=0,
        symbol=0x30,
        bindinfo=7,
    )


def test_xheader_round_trip():
    header = _sample_x()
    packed = header.pack()
    assert len(packed) == XHeader.SIZE
    assert XHeader.parse(packed) == header


def test_xheader_magic_is_big_endian():
    assert _sample_x().pack()[:2] == b"HU"


def test_xheader_parse_ignores_trailing_bytes():
    header = _sample_x()
    assert XHeader.parse(header.pack() + b"\xff" * 10) == header


def test_xheader_section_addresses():
    header = _sample_x()
    assert header.begin_text == header.base
    assert header.begin_data == header.base + header.text
    assert header.begin_bss == header.begin_data + header.data
    assert header.end == header.begin_bss + header.bss


def test_xheader_short_data_rejected():
    with pytest.raises(ValueError):
        XHeader.parse(_sample_x().pack()[:-1])


def test_xheader_bad_reserve_rejected():
    with pytest.raises(ValueError):
        XHeader(reserve=b"\0").pack()


def test_zheader_round_trip():
    header = ZHeader(text=0x100, data=0x20, bss=0x10, base=0x6800, pudding=3)
    packed = header.pack()
    assert len(packed) == ZHeader.SIZE
    assert ZHeader.parse(packed) == header


def test_zheader_magic_leads_the_file():
    packed = ZHeader().pack()
    assert packed[:2] == bytes([0x60, 0x1A])


def test_zheader_short_data_rejected():
    with pytest.raises(ValueError):
        ZHeader.parse(b"\x60\x1a")