# coding=utf-8
"""
Stat polling watches over binlog paths.

A listener registered for a path is called with the path's new
``os.stat_result`` (or ``None`` when the path is missing) whenever its
existence, size or modification time changes between two polls.
"""
import logging
import os

logger = logging.getLogger(__name__)


def _key(stat):
    if stat is None:
        return None
    return stat.st_size, stat.st_mtime_ns, stat.st_ino


def _snapshot(path):
    try:
        stat = os.stat(path)
    except OSError:
        return None, None
    return stat, _key(stat)


class StatWatcher(object):

    def __init__(self):
        self._watches = {}

    def watch_file(self, path, listener, stat=None):
        """
        Start calling listener on changes of path. When the caller already
        holds a stat of path, changes are counted from that one, so nothing
        written after it goes unreported.
        """
        if path not in self._watches:
            baseline = _key(stat) if stat is not None else _snapshot(path)[1]
            self._watches[path] = [baseline, []]
        self._watches[path][1].append(listener)
        logger.debug("Watching %s" % path)

    def unwatch_file(self, path, listener=None):
        """
        Stop watching path, for one listener or for all of them
        """
        watch = self._watches.get(path)
        if watch is None:
            return
        if listener is not None and listener in watch[1]:
            watch[1].remove(listener)
        if listener is None or not watch[1]:
            del self._watches[path]
            logger.debug("Stopped watching %s" % path)

    def is_watching(self, path, listener=None):
        watch = self._watches.get(path)
        if watch is None:
            return False
        return listener is None or listener in watch[1]

    def poll(self):
        """
        Stat every watched path once and fire the listeners of changed ones.
        Returns the number of listeners fired.
        """
        fired = 0
        for path in list(self._watches):
            watch = self._watches.get(path)
            if watch is None:
                continue
            stat, key = _snapshot(path)
            if key == watch[0]:
                continue
            watch[0] = key
            for listener in list(watch[1]):
                # a listener may unwatch the others
                if self.is_watching(path, listener):
                    listener(stat)
                    fired += 1
        return fired

    def __len__(self):
        return len(self._watches)
