# coding=utf-8
from py_mysql_binlogtailer.constants.EVENT_TYPE import ROTATE_EVENT
from py_mysql_binlogtailer.packet.event_header import BinlogEvent
from py_mysql_binlogtailer.protocol.proto import Proto


class RotateEvent(BinlogEvent):
    '''
    https://dev.mysql.com/doc/internals/en/rotate-event.html
    8              position
    string[EOF]    name of the next binlog
    '''
    __slots__ = ('position', 'next_binlog')

    event_type = ROTATE_EVENT

    def __init__(self, next_binlog='', position=4, timestamp=0, server_id=1):
        super(RotateEvent, self).__init__(timestamp, server_id)
        self.position = position
        self.next_binlog = next_binlog

    def getEventBody(self):
        payload = bytearray()

        payload.extend(Proto.build_fixed_int(8, self.position))
        payload.extend(Proto.build_eop_str(self.next_binlog))

        return payload

    @staticmethod
    def loadFromPacket(header, packet):
        obj = RotateEvent(timestamp=header.timestamp, server_id=header.server_id)
        proto = Proto(packet)

        obj.position = proto.get_fixed_int(8)
        obj.next_binlog = proto.get_eop_str()

        return obj
