# coding=utf-8
"""
Exceptions raised while tailing a binlog.

Every fatal condition ends up published once as an ``Error`` notification
carrying one of these as its cause.
"""


class BinlogTailerError(Exception):
    """Base exception for all binlog tailer errors."""

    def __init__(self, message, details=None):
        super(BinlogTailerError, self).__init__(message)
        self.message = message
        self.details = details or {}


class InvalidBinlogError(BinlogTailerError):
    """Raised when a file does not follow the binlog framing."""

    def __init__(self, message, path=None, offset=None):
        details = {}
        if path:
            details["path"] = path
        if offset is not None:
            details["offset"] = offset
        super(InvalidBinlogError, self).__init__(message, details)
        self.path = path
        self.offset = offset


class UnsupportedBinlogVersion(InvalidBinlogError):
    """Raised when the first event is not a format description event."""

    def __init__(self, event_type, path=None):
        super(UnsupportedBinlogVersion, self).__init__("Invalid binlog version", path, 4)
        self.details["event_type"] = event_type
        self.event_type = event_type


class BinlogIOError(BinlogTailerError):
    """Raised when stat, open or read of a binlog or index file fails."""

    def __init__(self, operation, path=None, cause=None):
        details = {"operation": operation}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = str(cause)
        message = "Binlog I/O error during %s" % operation
        if path:
            message += ": %s" % path
        super(BinlogIOError, self).__init__(message, details)
        self.operation = operation
        self.path = path
        self.cause = cause


class IndexResolutionError(BinlogTailerError):
    """Raised when the index file lists no binlog."""

    def __init__(self, index_file):
        super(IndexResolutionError, self).__init__("No binlogs?", {"index_file": index_file})
        self.index_file = index_file
