from __future__ import annotations

import array
import dataclasses

import pytest

from contract_crypto.runtime.buffer import BufferView, SourceKind, buffer_view


def test_bytes_like_sources_share_one_shape() -> None:
    for src in (b"abc", bytearray(b"abc"), memoryview(b"abc")):
        view = buffer_view(src)
        assert view.kind is SourceKind.BYTES
        assert view.length == 3
        assert view.tobytes() == b"abc"


def test_text_is_utf8_encoded() -> None:
    view = buffer_view("zß")
    assert view.kind is SourceKind.TEXT
    assert view.length == 3
    assert view.tobytes() == "zß".encode("utf-8")


def test_element_buffers_count_raw_bytes() -> None:
    words = array.array("H", [1, 2, 3])
    view = buffer_view(words)
    assert view.length == 3 * words.itemsize
    assert view.tobytes() == words.tobytes()


def test_existing_view_returned_as_is() -> None:
    view = BufferView.from_raw(b"abcdef", 2)
    assert buffer_view(view) is view


def test_raw_view_truncates_to_length() -> None:
    view = BufferView.from_raw(bytearray(b"abcdef"), 4)
    assert view.kind is SourceKind.RAW
    assert len(view) == 4
    assert view.tobytes() == b"abcd"


@pytest.mark.parametrize("length", [-1, 7])
def test_raw_view_rejects_bad_lengths(length: int) -> None:
    with pytest.raises(ValueError):
        BufferView.from_raw(b"abcdef", length)


def test_from_elements_packs_little_endian() -> None:
    view = BufferView.from_elements([1, 0x0203], "H")
    assert view.kind is SourceKind.ELEMENTS
    assert view.tobytes() == b"\x01\x00\x03\x02"


def test_from_array_enforces_count() -> None:
    view = BufferView.from_array([1, 2], "Q", 2)
    assert view.kind is SourceKind.ARRAY
    assert view.length == 16
    with pytest.raises(ValueError):
        BufferView.from_array([1, 2, 3], "Q", 2)


def test_from_elements_rejects_bad_format_and_values() -> None:
    with pytest.raises(ValueError):
        BufferView.from_elements([1], "x")
    with pytest.raises(ValueError):
        BufferView.from_elements([256], "B")


def test_non_buffer_sources_rejected() -> None:
    with pytest.raises(TypeError):
        buffer_view(12345)
    with pytest.raises(TypeError):
        buffer_view([1, 2, 3])


def test_non_contiguous_buffer_rejected() -> None:
    strided = memoryview(b"abcdef")[::2]
    with pytest.raises(ValueError):
        buffer_view(strided)


def test_view_is_immutable() -> None:
    view = buffer_view(b"abc")
    with pytest.raises(dataclasses.FrozenInstanceError):
        view.length = 1  # type: ignore[misc]
