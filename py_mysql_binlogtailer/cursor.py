# coding=utf-8
import logging

from py_mysql_binlogtailer.protocol.errors import BinlogTailerError, BinlogIOError

logger = logging.getLogger(__name__)


class ByteCursor(object):
    """
    Demand-driven reader over a file that another process keeps appending to.

    ``request(n, callback)`` hands exactly n bytes from the current offset to
    ``callback`` as soon as the known file size covers them, then moves the
    offset past them. Until then the request stays parked, and every call to
    ``grow`` retries it. Only one request can be outstanding: the callback is
    expected to issue the next one.

    Reads never cross the known end of file, and a read that comes back short
    is retried on the next growth instead of being delivered.
    """

    def __init__(self, handle, size=0, offset=0, path=None, on_error=None):
        self._handle = handle
        self.path = path
        self.offset = offset
        self.size = size
        self.bytes_wanted = 0
        self._callback = None
        self._ready = handle is not None
        self._draining = False
        self._on_error = on_error

    @property
    def pending(self):
        return self._callback is not None

    @property
    def closed(self):
        return not self._ready

    def request(self, size, callback):
        """
        Requests a chunk of a certain size, callback runs once it is read
        """
        if self._callback is not None:
            raise RuntimeError("%d bytes are already requested at offset %d" % (self.bytes_wanted, self.offset))
        self.bytes_wanted = size
        self._callback = callback
        self.check()

    def skip(self, size):
        """
        Skips forward in the file. Only affects the next read
        """
        if size < 0:
            raise ValueError("Cannot skip backwards (%d bytes)" % size)
        self.offset += size

    def grow(self, size):
        """
        Record the file's new size and retry the outstanding request
        """
        self.size = size
        self.check()

    def close(self):
        self._ready = False
        self._callback = None
        self.bytes_wanted = 0

    def check(self):
        """
        Serve the outstanding request if the file is big enough, and keep
        serving the requests the callbacks issue until one has to wait.
        """
        if self._draining:
            return
        self._draining = True
        try:
            while self._ready and self._callback is not None:
                if self.size < self.offset + self.bytes_wanted:
                    logger.debug("Waiting for %d bytes at offset %d of %s (size %d)" % (
                        self.bytes_wanted, self.offset, self.path, self.size))
                    return
                buffer = self._read(self.offset, self.bytes_wanted)
                if len(buffer) < self.bytes_wanted:
                    logger.debug("Short read of %d/%d bytes at offset %d of %s" % (
                        len(buffer), self.bytes_wanted, self.offset, self.path))
                    return
                self.offset += self.bytes_wanted
                callback = self._callback
                self._callback = None
                self.bytes_wanted = 0
                callback(buffer)
        except BinlogTailerError as e:
            self.close()
            if self._on_error is None:
                raise
            self._on_error(e)
        finally:
            self._draining = False

    def _read(self, offset, size):
        if size == 0:
            return b''
        try:
            self._handle.seek(offset)
            return self._handle.read(size)
        except (OSError, ValueError) as e:
            raise BinlogIOError("read", self.path, e)
