# coding=utf-8
import codecs

from pymysql.charset import charset_by_id

from py_mysql_binlogtailer.constants.EVENT_TYPE import QUERY_EVENT
from py_mysql_binlogtailer.packet.event_header import BinlogEvent
from py_mysql_binlogtailer.protocol.errors import InvalidBinlogError
from py_mysql_binlogtailer.protocol.proto import Proto

QUERY_FIXED_LENGTH = 13

# status variable codes, libbinlogevents/include/statement_events.h
Q_FLAGS2_CODE = 0
Q_SQL_MODE_CODE = 1
Q_CATALOG_CODE = 2
Q_AUTO_INCREMENT = 3
Q_CHARSET_CODE = 4
Q_TIME_ZONE_CODE = 5
Q_CATALOG_NZ_CODE = 6
Q_LC_TIME_NAMES_CODE = 7
Q_CHARSET_DATABASE_CODE = 8
Q_TABLE_MAP_FOR_UPDATE_CODE = 9
Q_MASTER_DATA_WRITTEN_CODE = 10
Q_INVOKER = 11
Q_UPDATED_DB_NAMES = 12
Q_MICROSECONDS = 13
Q_EXPLICIT_DEFAULTS_FOR_TIMESTAMP = 16
Q_DDL_LOGGED_WITH_XID = 17
Q_DEFAULT_COLLATION_FOR_UTF8MB4 = 18
Q_SQL_REQUIRE_PRIMARY_KEY = 19
Q_DEFAULT_TABLE_ENCRYPTION = 20

_FIXED_STATUS_VARS = {
    Q_FLAGS2_CODE: 4,
    Q_SQL_MODE_CODE: 8,
    Q_AUTO_INCREMENT: 4,
    Q_CHARSET_CODE: 6,
    Q_LC_TIME_NAMES_CODE: 2,
    Q_CHARSET_DATABASE_CODE: 2,
    Q_TABLE_MAP_FOR_UPDATE_CODE: 8,
    Q_MASTER_DATA_WRITTEN_CODE: 4,
    Q_MICROSECONDS: 3,
    Q_EXPLICIT_DEFAULTS_FOR_TIMESTAMP: 1,
    Q_DDL_LOGGED_WITH_XID: 8,
    Q_DEFAULT_COLLATION_FOR_UTF8MB4: 2,
    Q_SQL_REQUIRE_PRIMARY_KEY: 1,
    Q_DEFAULT_TABLE_ENCRYPTION: 1,
}


def parse_status_vars(status_vars):
    """
    Walk the status variable block and return {code: raw value bytes}.

    The walk stops at the first code it does not know the size of, so the
    result may be partial.

    >>> parse_status_vars(b'\\x04\\x21\\x00\\x21\\x00\\x08\\x00')[Q_CHARSET_CODE]
    b'!\\x00!\\x00\\x08\\x00'
    """
    values = {}
    proto = Proto(status_vars)
    while proto.has_remaining_data():
        code = proto.get_fixed_int(1)
        if code in _FIXED_STATUS_VARS:
            size = _FIXED_STATUS_VARS[code]
        elif code == Q_CATALOG_CODE:
            size = proto.packet[proto.offset] + 2
        elif code in (Q_TIME_ZONE_CODE, Q_CATALOG_NZ_CODE):
            size = proto.packet[proto.offset] + 1
        elif code == Q_INVOKER:
            user_length = proto.packet[proto.offset]
            size = 2 + user_length + proto.packet[proto.offset + 1 + user_length]
        elif code == Q_UPDATED_DB_NAMES:
            count = proto.packet[proto.offset]
            end = proto.offset + 1
            if count <= 16:
                for _ in range(count):
                    end = status_vars.index(b'\x00', end) + 1
            size = end - proto.offset
        else:
            break
        if size > proto.remaining():
            break
        values[code] = proto.read(size)
    return values


def client_encoding(status_vars, default='utf-8'):
    """
    Python codec for the client character set recorded in the status vars
    """
    try:
        charset = parse_status_vars(status_vars).get(Q_CHARSET_CODE)
    except (IndexError, ValueError):
        return default
    if charset is None:
        return default
    try:
        encoding = charset_by_id(Proto(charset).get_fixed_int(2)).encoding
        return codecs.lookup(encoding).name
    except (KeyError, LookupError):
        return default


class QueryEvent(BinlogEvent):
    '''
    https://dev.mysql.com/doc/internals/en/query-event.html
    4              slave_proxy_id
    4              execution time
    1              schema length
    2              error-code
    2              status-vars length
    string[$len]   status-vars
    string[$len]   schema
    1              [00]
    string[EOF]    query
    '''
    __slots__ = ('thread_id', 'exec_time', 'error_code', 'status_vars', 'schema', 'query')

    event_type = QUERY_EVENT

    def __init__(self, timestamp=0, server_id=1, schema='', query='', status_vars=b''):
        super(QueryEvent, self).__init__(timestamp, server_id)
        self.thread_id = 0
        self.exec_time = 0
        self.error_code = 0
        self.status_vars = status_vars
        self.schema = schema
        self.query = query

    def getEventBody(self):
        payload = bytearray()
        schema = self.schema.encode('utf-8')

        payload.extend(Proto.build_fixed_int(4, self.thread_id))
        payload.extend(Proto.build_fixed_int(4, self.exec_time))
        payload.extend(Proto.build_fixed_int(1, len(schema)))
        payload.extend(Proto.build_fixed_int(2, self.error_code))
        payload.extend(Proto.build_fixed_int(2, len(self.status_vars)))
        payload.extend(self.status_vars)
        payload.extend(Proto.build_null_str(schema))
        payload.extend(Proto.build_eop_str(self.query))

        return payload

    @staticmethod
    def loadFromPacket(header, packet):
        if len(packet) < QUERY_FIXED_LENGTH:
            raise InvalidBinlogError("Query event body too short: %d bytes" % len(packet))

        obj = QueryEvent(header.timestamp, header.server_id)
        proto = Proto(packet)

        obj.thread_id = proto.get_fixed_int(4)
        obj.exec_time = proto.get_fixed_int(4)
        schema_length = proto.get_fixed_int(1)
        obj.error_code = proto.get_fixed_int(2)
        status_length = proto.get_fixed_int(2)
        if len(packet) < QUERY_FIXED_LENGTH + status_length + schema_length:
            raise InvalidBinlogError("Query event body too short for schema and status vars")

        obj.status_vars = proto.read(status_length)
        obj.schema = proto.get_fixed_str(schema_length)
        proto.get_filler(1)
        obj.query = proto.get_eop_str(client_encoding(obj.status_vars))

        return obj
