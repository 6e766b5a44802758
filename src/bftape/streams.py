from __future__ import annotations

import io
from typing import Any, List, Optional


class ByteSource:
    """
    Byte-at-a-time view over whatever the caller supplies as program input.

    Accepts None (empty), bytes/bytearray, str (UTF-8 encoded), a binary
    file object, or a text file object with a ``.buffer`` such as sys.stdin.
    I/O failures from the underlying object (OSError, ValueError on a closed
    file) propagate to the caller unchanged.
    """

    def __init__(self, data: bytes = b"", fp: Any = None):
        self._pending: List[int] = list(data)
        self._pending.reverse()
        self._fp = fp

    @classmethod
    def wrap(cls, obj: Any) -> "ByteSource":
        if isinstance(obj, ByteSource):
            return obj
        if obj is None:
            return cls()
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return cls(bytes(obj))
        if isinstance(obj, str):
            return cls(obj.encode('utf-8'))
        if hasattr(obj, 'buffer'):
            return cls(fp=obj.buffer)
        if hasattr(obj, 'read'):
            return cls(fp=obj)
        raise TypeError(f'Unsupported input stream: {type(obj).__name__}')

    def read_byte(self) -> Optional[int]:
        """Return the next byte, or None once the input is exhausted."""
        if self._pending:
            return self._pending.pop()
        if self._fp is None:
            return None

        chunk = self._fp.read(1)
        if not chunk:
            return None
        if isinstance(chunk, str):
            # Text streams without a buffer hand out characters, not bytes
            encoded = chunk.encode('utf-8')
            self._pending.extend(reversed(encoded[1:]))
            return encoded[0]
        return chunk[0]


class ByteSink:
    """
    Destination for printed bytes, written and flushed one at a time.

    Accepts None (kept in memory), a bytearray (appended to), a binary file
    object, or a text file object with a ``.buffer`` such as sys.stdout.
    Bytes are retained for getvalue() only when there is nowhere else to put
    them or when ``record`` is set.
    """

    def __init__(
        self,
        fp: Any = None,
        target: Optional[bytearray] = None,
        text: bool = False,
        record: bool = False,
    ):
        self._fp = fp
        self._target = target
        self._text = text
        self._written: Optional[bytearray] = None
        if record or (fp is None and target is None):
            self._written = bytearray()

    @classmethod
    def wrap(cls, obj: Any, *, record: bool = False) -> "ByteSink":
        if isinstance(obj, ByteSink):
            return obj
        if obj is None:
            return cls()
        if isinstance(obj, bytearray):
            return cls(target=obj, record=record)
        if hasattr(obj, 'buffer'):
            # Push out anything still pending in the text layer first
            flush = getattr(obj, 'flush', None)
            if flush is not None:
                flush()
            return cls(fp=obj.buffer, record=record)
        if isinstance(obj, io.TextIOBase):
            return cls(fp=obj, text=True, record=record)
        if hasattr(obj, 'write'):
            return cls(fp=obj, record=record)
        raise TypeError(f'Unsupported output sink: {type(obj).__name__}')

    def write_byte(self, value: int) -> None:
        data = bytes((value,))
        if self._fp is not None:
            # Text sinks get one code point per byte
            self._fp.write(data.decode('latin-1') if self._text else data)
            flush = getattr(self._fp, 'flush', None)
            if flush is not None:
                flush()
        if self._target is not None:
            self._target.extend(data)
        if self._written is not None:
            self._written.extend(data)

    def getvalue(self) -> bytes:
        if self._written is None:
            return b""
        return bytes(self._written)
