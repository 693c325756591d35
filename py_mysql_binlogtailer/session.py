# coding=utf-8
import logging
import os

from py_mysql_binlogtailer.cursor import ByteCursor
from py_mysql_binlogtailer.protocol.errors import BinlogIOError

logger = logging.getLogger(__name__)


class FileSession(object):
    """
    Owns one binlog file: its handle, its cursor and its watch.

    When ``fast_forward`` is set, the file's size at start becomes
    ``fast_forward_until``, the offset below which queries are not published.
    A session never reopens its file; following another file takes a new
    session.
    """

    def __init__(self, path, watcher, fast_forward=False, on_error=None):
        self.path = path
        self.fast_forward = fast_forward
        self.fast_forward_until = None
        self.cursor = None
        self._watcher = watcher
        self._handle = None
        self.on_error = on_error
        self.stopped = False

    def start(self):
        """
        Stat, open and watch the file. Raises BinlogIOError.
        """
        try:
            stat = os.stat(self.path)
        except OSError as e:
            raise BinlogIOError("stat", self.path, e)
        if self.fast_forward:
            self.fast_forward_until = stat.st_size

        try:
            self._handle = open(self.path, "rb")
        except OSError as e:
            raise BinlogIOError("open", self.path, e)

        self.cursor = ByteCursor(self._handle, size=stat.st_size, path=self.path, on_error=self.fail)
        self._watcher.watch_file(self.path, self._on_change, stat=stat)
        logger.info("Opened binlog %s (%d bytes%s)" % (
            self.path, stat.st_size, ", fast-forwarding" if self.fast_forward else ""))
        return self

    @property
    def offset(self):
        return self.cursor.offset if self.cursor else 0

    def fast_forwarding(self):
        """
        Whether the cursor is still in the history present at start
        """
        return self.fast_forward_until is not None and self.offset < self.fast_forward_until

    def _on_change(self, stat):
        if stat is None or self.stopped:
            return
        self.cursor.grow(stat.st_size)

    def stop(self):
        """
        Terminates all access to this file
        """
        if self.stopped:
            return
        self.stopped = True
        self._watcher.unwatch_file(self.path, self._on_change)
        if self.cursor is not None:
            self.cursor.close()
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        logger.debug("Closed binlog %s at offset %d" % (self.path, self.offset))

    def fail(self, cause):
        self.stop()
        logger.error("Stopped tailing %s: %s" % (self.path, cause))
        if self.on_error is not None:
            self.on_error(cause)
