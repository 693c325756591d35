# coding=utf-8
import struct

from py_mysql_binlogtailer.protocol.proto import Proto

BINLOG_MAGIC = bytes.fromhex('fe62696e')
EVENT_HEADER_LENGTH = 19


class EventHeader(object):
    '''
    https://dev.mysql.com/doc/internals/en/binlog-event-header.html
    4              timestamp
    1              event type
    4              server-id
    4              event-size
    4              log pos
    2              flags
    '''
    __slots__ = ('timestamp', 'event_type', 'server_id', 'event_size', 'log_pos', 'flags')

    def __init__(self, timestamp=0, event_type=0, server_id=0, event_size=EVENT_HEADER_LENGTH,
                 log_pos=0, flags=0):
        self.timestamp = timestamp
        self.event_type = event_type
        self.server_id = server_id
        self.event_size = event_size
        self.log_pos = log_pos
        self.flags = flags

    @property
    def body_length(self):
        return self.event_size - EVENT_HEADER_LENGTH

    def getPayload(self):
        payload = bytearray()

        payload.extend(Proto.build_fixed_int(4, self.timestamp))
        payload.extend(Proto.build_fixed_int(1, self.event_type))
        payload.extend(Proto.build_fixed_int(4, self.server_id))
        payload.extend(Proto.build_fixed_int(4, self.event_size))
        payload.extend(Proto.build_fixed_int(4, self.log_pos))
        payload.extend(Proto.build_fixed_int(2, self.flags))

        return payload

    @staticmethod
    def loadFromPacket(packet):
        timestamp, event_type, server_id, event_size, log_pos, flags = struct.unpack(
            '<IBIIIH', bytes(packet[:EVENT_HEADER_LENGTH]))
        return EventHeader(timestamp, event_type, server_id, event_size, log_pos, flags)

    def __repr__(self):
        return 'EventHeader(timestamp=%d, event_type=%d, event_size=%d, log_pos=%d)' % (
            self.timestamp, self.event_type, self.event_size, self.log_pos)


class BinlogEvent(object):
    """
    Basic class for all binlog events to inherit from
    """
    __slots__ = ('timestamp', 'server_id', 'log_pos', 'flags')

    event_type = None

    def __init__(self, timestamp=0, server_id=1):
        self.timestamp = timestamp
        self.server_id = server_id
        self.log_pos = 0
        self.flags = 0

    def getEventBody(self):
        """
        Return the event body as a bytearray
        """
        raise NotImplementedError('getEventBody')

    def toPacket(self):
        """
        Convert the event to its on-disk bytes, header included
        """
        body = self.getEventBody()
        header = EventHeader(self.timestamp, self.event_type, self.server_id,
                             EVENT_HEADER_LENGTH + len(body), self.log_pos, self.flags)

        packet = header.getPayload()
        packet.extend(body)
        return packet
