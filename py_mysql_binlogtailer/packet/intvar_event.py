# coding=utf-8
from py_mysql_binlogtailer.constants.EVENT_TYPE import INTVAR_EVENT, INSERT_ID_EVENT
from py_mysql_binlogtailer.packet.event_header import BinlogEvent
from py_mysql_binlogtailer.protocol.proto import Proto

INTVAR_BODY_LENGTH = 9


class IntvarEvent(BinlogEvent):
    '''
    https://dev.mysql.com/doc/internals/en/intvar-event.html
    1              type (1 LAST_INSERT_ID_EVENT, 2 INSERT_ID_EVENT)
    8              value
    '''
    __slots__ = ('intvar_type', 'value')

    event_type = INTVAR_EVENT

    def __init__(self, intvar_type=INSERT_ID_EVENT, value=0, timestamp=0, server_id=1):
        super(IntvarEvent, self).__init__(timestamp, server_id)
        self.intvar_type = intvar_type
        self.value = value

    def getEventBody(self):
        payload = bytearray()

        payload.extend(Proto.build_fixed_int(1, self.intvar_type))
        payload.extend(Proto.build_fixed_int(8, self.value))

        return payload

    @staticmethod
    def loadFromPacket(header, packet):
        obj = IntvarEvent(timestamp=header.timestamp, server_id=header.server_id)
        proto = Proto(packet)

        obj.intvar_type = proto.get_fixed_int(1)
        # only the low 32 bits of the value are honoured
        obj.value = proto.get_fixed_int(4)

        return obj
