#!/usr/bin/env python3
"""
Tests for the input source / output sink adapters.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bftape import compile_program, execute
from bftape.streams import ByteSink, ByteSource


def drain(source):
    out = []
    while True:
        value = source.read_byte()
        if value is None:
            return out
        out.append(value)


def test_source_from_bytes():
    assert drain(ByteSource.wrap(b"hi")) == [104, 105]
    assert drain(ByteSource.wrap(bytearray(b"\x00\xff"))) == [0, 255]


def test_source_from_none_is_exhausted():
    assert ByteSource.wrap(None).read_byte() is None


def test_source_from_str_is_utf8():
    assert drain(ByteSource.wrap("é")) == [0xC3, 0xA9]


def test_source_from_binary_file():
    assert drain(ByteSource.wrap(io.BytesIO(b"ok"))) == [111, 107]


def test_source_from_text_file_without_buffer():
    assert drain(ByteSource.wrap(io.StringIO("aé"))) == [97, 0xC3, 0xA9]


def test_source_from_text_file_with_buffer():
    wrapper = io.TextIOWrapper(io.BytesIO(b"xy"))
    assert drain(ByteSource.wrap(wrapper)) == [120, 121]


def test_source_rejects_unknown_objects():
    with pytest.raises(TypeError):
        ByteSource.wrap(42)


def test_sink_collects_in_memory():
    sink = ByteSink.wrap(None)
    sink.write_byte(65)
    sink.write_byte(0)
    assert sink.getvalue() == b"A\x00"


def test_sink_appends_to_bytearray():
    target = bytearray(b">")
    sink = ByteSink.wrap(target)
    sink.write_byte(66)
    assert target == bytearray(b">B")


def test_sink_flushes_every_byte():
    class Recorder(io.BytesIO):
        flushes = 0

        def flush(self):
            Recorder.flushes += 1
            super().flush()

    fp = Recorder()
    execute(compile_program("+.+.+."), 4, None, fp)
    assert fp.getvalue() == b"\x01\x02\x03"
    assert Recorder.flushes == 3


def test_sink_to_text_file():
    fp = io.StringIO()
    execute(compile_program("-."), 4, None, fp)
    assert fp.getvalue() == "\xff"


def test_sink_rejects_unknown_objects():
    with pytest.raises(TypeError):
        ByteSink.wrap(3.5)


def test_file_sink_keeps_no_copy():
    fp = io.BytesIO()
    sink = ByteSink.wrap(fp)
    for _ in range(1000):
        sink.write_byte(65)
    assert fp.getvalue() == b"A" * 1000
    assert sink.getvalue() == b""
    assert sink._written is None


def test_bytearray_sink_keeps_no_copy():
    target = bytearray()
    sink = ByteSink.wrap(target)
    sink.write_byte(1)
    assert target == bytearray(b"\x01")
    assert sink._written is None


def test_recording_sink_retains_output():
    fp = io.BytesIO()
    sink = ByteSink.wrap(fp, record=True)
    sink.write_byte(66)
    assert fp.getvalue() == b"B"
    assert sink.getvalue() == b"B"


def test_text_sink_flushes_pending_text_first():
    raw = io.BytesIO()
    wrapper = io.TextIOWrapper(raw, encoding="ascii")
    wrapper.write("pre:")
    execute(compile_program("++++++++[>++++++++<-]>+."), 4, None, wrapper)
    assert raw.getvalue() == b"pre:A"
