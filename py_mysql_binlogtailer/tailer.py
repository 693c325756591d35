# coding=utf-8
import logging
import os
import threading

from py_mysql_binlogtailer.channel import QueueChannel
from py_mysql_binlogtailer.decoder import EventDecoder
from py_mysql_binlogtailer.notification import Error
from py_mysql_binlogtailer.protocol.errors import BinlogTailerError, BinlogIOError, IndexResolutionError
from py_mysql_binlogtailer.rotation import RotationCoordinator
from py_mysql_binlogtailer.session import FileSession
from py_mysql_binlogtailer.watch import StatWatcher

logger = logging.getLogger(__name__)


def resolve_index(index_file):
    """
    Absolute path of the binlog most recently listed in a binlog index file
    """
    try:
        with open(index_file, "r", encoding="utf-8") as fr:
            entries = [line.strip() for line in fr.read().split("\n")]
    except OSError as e:
        raise BinlogIOError("read index", index_file, e)

    while entries and entries[-1] == '':
        entries.pop()
    if not entries:
        raise IndexResolutionError(index_file)

    binlog_dir = os.path.dirname(os.path.abspath(index_file))
    return os.path.normpath(os.path.join(binlog_dir, entries[-1]))


class BinlogTailer(object):
    """Tails the binlogs of a MySQL index file and publishes a notification
    for every query executed, server stop and log rotation.

    The binlog the index points at is fast-forwarded: queries already in it
    when tailing starts are not published. Binlogs reached through rotation
    are published from their start. All sessions publish to the same channel.

    Nothing happens outside ``start()`` and ``poll()``; ``run()`` calls
    ``poll()`` every ``poll_interval`` seconds until ``stop()``.
    """

    def __init__(self, index_file, channel=None, poll_interval=1.0, watcher=None):
        self.index_file = index_file
        self.binlog_dir = os.path.dirname(os.path.abspath(index_file))
        self.channel = channel if channel is not None else QueueChannel()
        self.poll_interval = poll_interval
        self.watcher = watcher or StatWatcher()
        self.rotation = RotationCoordinator(self.watcher, self.binlog_dir, self._stream)
        self.session = None
        self.decoder = None
        self._started = False
        self._stopping = threading.Event()
        # cursors and watches are driven from one thread at a time
        self._lock = threading.RLock()
        self._thread = None

    def _publish(self, notification):
        logger.debug("Publish %r" % (notification,))
        self.channel.publish(notification)

    def start(self):
        with self._lock:
            if self._started:
                return
            self._started = True
            logger.info("Start tailing binlogs of %s" % self.index_file)
            try:
                path = resolve_index(self.index_file)
            except BinlogTailerError as e:
                logger.error("Cannot resolve binlog index %s: %s" % (self.index_file, e))
                self._publish(Error(e))
                return
            self._stream(path, fast_forward=True)

    def _stream(self, path, fast_forward=False):
        session = FileSession(path, self.watcher, fast_forward)
        decoder = EventDecoder(session, self._publish, self.rotation)
        session.on_error = decoder.fail
        self.session = session
        self.decoder = decoder
        try:
            session.start()
        except BinlogTailerError as e:
            logger.error("Cannot tail %s: %s" % (path, e))
            decoder.fail(e)
            return
        decoder.start()

    def poll(self):
        """
        Start if needed, then deliver every pending file change once.
        Returns the number of watch listeners fired.
        """
        with self._lock:
            self.start()
            return self.watcher.poll()

    def run(self):
        self._stopping.clear()
        try:
            self.start()
            while not self._stopping.is_set():
                self.poll()
                self._stopping.wait(self.poll_interval)
        finally:
            self.close()

    def run_in_thread(self):
        self._thread = threading.Thread(target=self.run, name="binlog-tailer")
        self._thread.daemon = True
        self._thread.start()
        return self._thread

    def stop(self):
        """
        Ask the run loop to exit, from any thread
        """
        self._stopping.set()

    def join(self, timeout=None):
        if self._thread is not None:
            self._thread.join(timeout)

    def close(self):
        """
        Stop the active session and any wait for a rotated binlog
        """
        with self._lock:
            self.rotation.cancel()
            if self.session is not None:
                self.session.stop()
        logger.info("Stop tailing binlogs of %s" % self.index_file)

    def running_in_thread(self):
        return self._thread is not None and self._thread.is_alive()

    def fetchone(self):
        """
        Next notification, polling until there is one. While run_in_thread()
        is polling, just waits for that thread to publish. Returns None and
        closes the tailer once stop() has been called.
        """
        if not isinstance(self.channel, QueueChannel):
            raise TypeError("fetchone() needs a QueueChannel, not %s" % type(self.channel).__name__)
        self.start()
        while not self._stopping.is_set():
            if self.running_in_thread():
                notification = self.channel.get(True, self.poll_interval)
                if notification is not None:
                    return notification
                continue
            notification = self.channel.get()
            if notification is not None:
                return notification
            if self.poll() == 0:
                self._stopping.wait(self.poll_interval)
        self.close()
        return None

    def __iter__(self):
        return iter(self.fetchone, None)
