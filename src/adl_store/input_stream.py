from __future__ import annotations
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Dict, Optional
import io
import logging

from .config import UNSET
from .errors import StoreError

if TYPE_CHECKING:
    from .http_client import StoreClient


DEFAULT_BLOCK_SIZE = 4 * 1024 * 1024
DEFAULT_QUEUE_DEPTH = 4

log = logging.getLogger("adl.store.stream")


class StoreFileInputStream(io.RawIOBase):
    """Seekable binary reader over a store file with block read-ahead.

    The read-ahead depth comes from the client's options; 0 turns
    prefetching off and UNSET falls back to DEFAULT_QUEUE_DEPTH.
    """

    def __init__(self, client: StoreClient, path: str, block_size: int = DEFAULT_BLOCK_SIZE) -> None:
        self._pending: Dict[int, Future] = {}
        self._executor: Optional[ThreadPoolExecutor] = None
        super().__init__()
        if block_size <= 0:
            raise ValueError("block_size has to be positive")
        self._client = client
        self.path = path
        self.block_size = block_size
        depth = client.options.read_ahead_queue_depth
        self.queue_depth = DEFAULT_QUEUE_DEPTH if depth == UNSET else depth
        self._length: Optional[int] = None
        self._pos = 0
        self._buf = b""
        self._buf_start = -1
        if self.queue_depth > 0:
            self._executor = ThreadPoolExecutor(max_workers=self.queue_depth, thread_name_prefix="adl-readahead")

    @property
    def length(self) -> int:
        if self._length is None:
            self._length = self._client.get_file_status(self.path).length
        return self._length

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file")
        if whence == io.SEEK_SET:
            pos = offset
        elif whence == io.SEEK_CUR:
            pos = self._pos + offset
        elif whence == io.SEEK_END:
            pos = self.length + offset
        else:
            raise ValueError(f"invalid whence ({whence})")
        if pos < 0:
            raise ValueError("negative seek position")
        self._pos = pos
        return pos

    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file")
        if self._pos >= self.length:
            return 0
        start = self._pos - self._pos % self.block_size
        if start != self._buf_start:
            self._buf = self._load(start)
            self._buf_start = start
        view = memoryview(b).cast("B")
        off = self._pos - start
        chunk = self._buf[off:off + len(view)]
        n = len(chunk)
        view[:n] = chunk
        self._pos += n
        return n

    def _fetch(self, start: int) -> bytes:
        size = min(self.block_size, self.length - start)
        return self._client.read(self.path, start, size)

    def _load(self, start: int) -> bytes:
        fut = self._pending.pop(start, None)
        data = fut.result() if fut is not None else self._fetch(start)
        expected = min(self.block_size, self.length - start)
        # the server may return short reads; keep going until the block is full
        while len(data) < expected:
            more = self._client.read(self.path, start + len(data), expected - len(data))
            if not more:
                raise StoreError(
                    f"OPEN returned no data for {self.path} at offset {start + len(data)} before end of file"
                )
            data += more
        self._schedule(start + self.block_size)
        return data

    def _schedule(self, start: int) -> None:
        if self._executor is None:
            return
        end = start + self.queue_depth * self.block_size
        for off in list(self._pending):
            if off < start or off >= end:
                self._pending.pop(off).cancel()
        off = start
        while off < end and off < self.length:
            if off not in self._pending:
                log.debug("READAHEAD | path=%s | offset=%d", self.path, off)
                self._pending[off] = self._executor.submit(self._fetch, off)
            off += self.block_size

    def close(self) -> None:
        if not self.closed:
            for fut in self._pending.values():
                fut.cancel()
            self._pending.clear()
            if self._executor is not None:
                self._executor.shutdown(wait=False, cancel_futures=True)
        super().close()
