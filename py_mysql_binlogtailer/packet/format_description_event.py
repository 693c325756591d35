# coding=utf-8
import time

from py_mysql_binlogtailer.constants.EVENT_TYPE import FORMAT_DESCRIPTION_EVENT
from py_mysql_binlogtailer.packet.event_header import BinlogEvent, EVENT_HEADER_LENGTH
from py_mysql_binlogtailer.protocol.proto import Proto


class FormatDescriptionEvent(BinlogEvent):
    '''
    https://dev.mysql.com/doc/internals/en/format-description-event.html
    2                binlog-version
    string[50]       mysql-server version
    4                create timestamp
    1                event header length
    string[p]        event type header lengths
    '''
    __slots__ = ('binlog_version', 'mysql_server_version', 'create_timestamp', 'header_length',
                 'event_type_header_length')

    event_type = FORMAT_DESCRIPTION_EVENT

    def __init__(self, timestamp=None, server_id=1):
        super(FormatDescriptionEvent, self).__init__(timestamp or int(time.time()), server_id)
        self.binlog_version = 4
        self.mysql_server_version = '5.7.25-log'
        self.create_timestamp = self.timestamp
        self.header_length = EVENT_HEADER_LENGTH
        self.event_type_header_length = bytes.fromhex(
            "38 0D 00 08 00 12 00 04 04 04 04 12 00 00 5F 00 04 1A 08 00 00 00 08 "
            "08 08 02 00 00 00 0A 0A 0A 2A 2A 00 12 34 00")

    def getEventBody(self):
        payload = bytearray()

        payload.extend(Proto.build_fixed_int(2, self.binlog_version))
        payload.extend(Proto.build_fixed_str(50, self.mysql_server_version))
        payload.extend(Proto.build_fixed_int(4, self.create_timestamp))
        payload.extend(Proto.build_fixed_int(1, self.header_length))
        payload.extend(self.event_type_header_length)

        return payload

