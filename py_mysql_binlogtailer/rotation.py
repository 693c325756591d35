# coding=utf-8
import logging
import os

logger = logging.getLogger(__name__)


class RotationCoordinator(object):
    """
    Moves tailing onto the binlog named by a rotate event.

    The next file may not exist yet when the rotate event is read; in that
    case its path is watched until it appears, however long that takes.
    """

    def __init__(self, watcher, binlog_dir, start_session):
        self._watcher = watcher
        self.binlog_dir = binlog_dir
        self._start_session = start_session
        self.waiting_for = None

    def resolve(self, name):
        return os.path.normpath(os.path.join(self.binlog_dir, name))

    def follow(self, path):
        # watch before looking, a file created in between is then still seen
        self.waiting_for = path
        self._watcher.watch_file(path, self._on_change)
        if os.path.exists(path):
            self.cancel()
            logger.info("Rotate new binlog file: %s" % path)
            self._start_session(path)
            return
        logger.info("Waiting for rotated binlog file: %s" % path)

    def _on_change(self, stat):
        if stat is None:
            return
        path = self.waiting_for
        self.cancel()
        logger.info("Rotate new binlog file: %s" % path)
        self._start_session(path)

    def cancel(self):
        if self.waiting_for is None:
            return
        self._watcher.unwatch_file(self.waiting_for, self._on_change)
        self.waiting_for = None
