# coding=utf-8
from py_mysql_binlogtailer.constants.EVENT_TYPE import STOP_EVENT
from py_mysql_binlogtailer.packet.event_header import BinlogEvent


class StopEvent(BinlogEvent):
    '''
    https://dev.mysql.com/doc/internals/en/stop-event.html
    empty body
    '''
    __slots__ = ()

    event_type = STOP_EVENT

    def getEventBody(self):
        return bytearray()
