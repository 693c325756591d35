# coding=utf-8
"""
Binlog event decoder.

The decoder drives a session's cursor through the binlog framing::

    EXPECT_MAGIC -> EXPECT_FORMAT_DESCRIPTION -> EXPECT_EVENT -> EXPECT_EVENT ...

Each state requests the bytes it needs and the matching ``_on_*`` handler
picks up from there. Handlers raise ``BinlogTailerError`` subclasses on
malformed input; the cursor turns those into a stopped session and a single
``Error`` notification.
"""
import logging
from functools import partial

from py_mysql_binlogtailer.constants.EVENT_TYPE import event_type_name, FORMAT_DESCRIPTION_EVENT, QUERY_EVENT, \
    STOP_EVENT, ROTATE_EVENT, INTVAR_EVENT, LAST_INSERT_ID_EVENT, INSERT_ID_EVENT
from py_mysql_binlogtailer.notification import AutoIncrementCarry, Error, LogStarted, Query, Rotated, \
    ServerStopped
from py_mysql_binlogtailer.packet.dump import dump
from py_mysql_binlogtailer.packet.event_header import BINLOG_MAGIC, EVENT_HEADER_LENGTH, EventHeader
from py_mysql_binlogtailer.packet.intvar_event import INTVAR_BODY_LENGTH, IntvarEvent
from py_mysql_binlogtailer.packet.query_event import QueryEvent
from py_mysql_binlogtailer.packet.rotate_event import RotateEvent
from py_mysql_binlogtailer.protocol.errors import InvalidBinlogError, UnsupportedBinlogVersion

logger = logging.getLogger(__name__)

EXPECT_MAGIC = 'expect_magic'
EXPECT_FORMAT_DESCRIPTION = 'expect_format_description'
EXPECT_EVENT = 'expect_event'
ROTATED = 'rotated'
STOPPED = 'stopped'

ROTATE_POSITION_LENGTH = 8


class EventDecoder(object):

    def __init__(self, session, publish, rotation):
        self.session = session
        self.publish = publish
        self.rotation = rotation
        self.state = None
        self.last_insert_id = None
        self.auto_increment = None
        self.eventmap = event_type_name()

    @property
    def cursor(self):
        return self.session.cursor

    @property
    def carry(self):
        if self.last_insert_id is None and self.auto_increment is None:
            return None
        return AutoIncrementCarry(self.last_insert_id, self.auto_increment)

    def start(self):
        self.expect_magic()

    def fail(self, cause):
        self.state = STOPPED
        self.publish(Error(cause))

    # Read binlog header
    def expect_magic(self):
        self.state = EXPECT_MAGIC
        self.cursor.request(len(BINLOG_MAGIC), self._on_magic)

    def _on_magic(self, buffer):
        if bytes(buffer) != BINLOG_MAGIC:
            raise InvalidBinlogError("Invalid binlog", self.session.path, 0)
        self.expect_format_description()

    # Get first event, with version information
    def expect_format_description(self):
        self.state = EXPECT_FORMAT_DESCRIPTION
        self.cursor.request(EVENT_HEADER_LENGTH, self._on_format_description)

    def _on_format_description(self, buffer):
        header = EventHeader.loadFromPacket(buffer)
        if header.event_type != FORMAT_DESCRIPTION_EVENT:
            raise UnsupportedBinlogVersion(header.event_type, self.session.path)
        self._check_length(header)
        self.cursor.skip(header.body_length)
        self.publish(LogStarted(header.timestamp, self.session.path))
        self.expect_event()

    # Parse an event
    def expect_event(self):
        self.state = EXPECT_EVENT
        self.cursor.request(EVENT_HEADER_LENGTH, self._on_event_header)

    def _on_event_header(self, buffer):
        header = EventHeader.loadFromPacket(buffer)
        self._check_length(header)
        logger.debug("Binlog Event[%s]: [%s] %s %s %s" % (header.timestamp, header.event_type,
                                                          self.eventmap.get(header.event_type),
                                                          header.event_size, header.log_pos))

        if header.event_type == QUERY_EVENT:
            self._query(header)
        elif header.event_type == STOP_EVENT:
            self._stop(header)
        elif header.event_type == ROTATE_EVENT:
            self._rotate(header)
        elif header.event_type == INTVAR_EVENT:
            self._intvar(header)
        else:
            dump(buffer, "Skipping %s" % self.eventmap.get(header.event_type, header.event_type))
            self.cursor.skip(header.body_length)
            self.expect_event()

    def _check_length(self, header):
        if header.event_size < EVENT_HEADER_LENGTH:
            raise InvalidBinlogError("Invalid event length %d" % header.event_size,
                                     self.session.path, self.cursor.offset - EVENT_HEADER_LENGTH)

    # Parse a query event
    def _query(self, header):
        # history present at start is skipped, the carry is left as is
        if self.session.fast_forwarding():
            self.cursor.skip(header.body_length)
            self.expect_event()
            return
        self.cursor.request(header.body_length, partial(self._on_query, header))

    def _on_query(self, header, buffer):
        event = QueryEvent.loadFromPacket(header, buffer)
        carry = self.carry
        self.last_insert_id = self.auto_increment = None
        self.publish(Query(header.timestamp, event.schema, event.query, carry))
        self.expect_event()

    # Parse a stop event (which is empty)
    def _stop(self, header):
        self.publish(ServerStopped(header.timestamp))
        self.cursor.skip(header.body_length)
        self.expect_event()

    # Parse a rotation event; onto the next file!
    def _rotate(self, header):
        if header.body_length < ROTATE_POSITION_LENGTH:
            raise InvalidBinlogError("Rotate event body too short: %d bytes" % header.body_length,
                                     self.session.path, self.cursor.offset - EVENT_HEADER_LENGTH)
        self.cursor.request(header.body_length, partial(self._on_rotate, header))

    def _on_rotate(self, header, buffer):
        event = RotateEvent.loadFromPacket(header, buffer)

        # Stop reading this log and wait for the next one
        self.session.stop()
        self.state = ROTATED
        next_path = self.rotation.resolve(event.next_binlog)
        self.publish(Rotated(next_path))
        self.rotation.follow(next_path)

    # Parse an auto_increment event
    def _intvar(self, header):
        if header.body_length < INTVAR_BODY_LENGTH:
            raise InvalidBinlogError("Intvar event body too short: %d bytes" % header.body_length,
                                     self.session.path, self.cursor.offset - EVENT_HEADER_LENGTH)
        self.cursor.request(INTVAR_BODY_LENGTH, partial(self._on_intvar, header))

    def _on_intvar(self, header, buffer):
        event = IntvarEvent.loadFromPacket(header, buffer)
        if event.intvar_type == LAST_INSERT_ID_EVENT:
            self.last_insert_id = event.value
        elif event.intvar_type == INSERT_ID_EVENT:
            self.auto_increment = event.value
        self.cursor.skip(header.body_length - INTVAR_BODY_LENGTH)
        self.expect_event()
