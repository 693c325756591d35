import struct
import unittest

from py_mysql_binlogtailer.constants.EVENT_TYPE import event_type_name, FORMAT_DESCRIPTION_EVENT, QUERY_EVENT, \
    ROTATE_EVENT, XID_EVENT, LAST_INSERT_ID_EVENT, INSERT_ID_EVENT
from py_mysql_binlogtailer.packet.dump import hexdump
from py_mysql_binlogtailer.packet.event_header import EventHeader, EVENT_HEADER_LENGTH
from py_mysql_binlogtailer.packet.format_description_event import FormatDescriptionEvent
from py_mysql_binlogtailer.packet.intvar_event import IntvarEvent
from py_mysql_binlogtailer.packet.query_event import QueryEvent, parse_status_vars, client_encoding, \
    Q_FLAGS2_CODE, Q_CHARSET_CODE
from py_mysql_binlogtailer.packet.rotate_event import RotateEvent
from py_mysql_binlogtailer.packet.stop_event import StopEvent
from py_mysql_binlogtailer.protocol.errors import InvalidBinlogError

__all__ = ["TestEventHeader", "TestQueryEvent", "TestOtherEvents"]


def charset_status_vars(client, flags2=True):
    status_vars = b''
    if flags2:
        status_vars += b'\x00' + struct.pack('<I', 0)
    status_vars += b'\x04' + struct.pack('<HHH', client, client, client)
    return status_vars


def body_of(event):
    return bytes(event.toPacket()[EVENT_HEADER_LENGTH:])


class TestEventHeader(unittest.TestCase):

    def test_load_from_packet(self):
        packet = struct.pack('<IBIIIH', 1546300800, 2, 3306101, 80, 200, 8)
        header = EventHeader.loadFromPacket(packet)
        self.assertEqual(header.timestamp, 1546300800)
        self.assertEqual(header.event_type, QUERY_EVENT)
        self.assertEqual(header.server_id, 3306101)
        self.assertEqual(header.event_size, 80)
        self.assertEqual(header.log_pos, 200)
        self.assertEqual(header.flags, 8)
        self.assertEqual(header.body_length, 80 - EVENT_HEADER_LENGTH)

    def test_payload_round_trip(self):
        header = EventHeader(1, ROTATE_EVENT, 2, 43, 120, 0x20)
        payload = header.getPayload()
        self.assertEqual(len(payload), EVENT_HEADER_LENGTH)
        self.assertEqual(repr(EventHeader.loadFromPacket(payload)), repr(header))

    def test_to_packet_sets_event_size(self):
        event = FormatDescriptionEvent(1546300800)
        packet = event.toPacket()
        header = EventHeader.loadFromPacket(packet)
        self.assertEqual(header.event_type, FORMAT_DESCRIPTION_EVENT)
        self.assertEqual(header.event_size, len(packet))
        self.assertEqual(header.timestamp, 1546300800)

    def test_stop_event_is_header_only(self):
        self.assertEqual(len(StopEvent(1).toPacket()), EVENT_HEADER_LENGTH)

    def test_event_type_name(self):
        names = event_type_name()
        self.assertEqual(names[FORMAT_DESCRIPTION_EVENT], 'FORMAT_DESCRIPTION_EVENT')
        self.assertEqual(names[XID_EVENT], 'XID_EVENT')
        self.assertEqual(names[1], 'START_EVENT_V3')
        self.assertEqual(names[2], 'QUERY_EVENT')


class TestQueryEvent(unittest.TestCase):

    def test_body_layout(self):
        body = body_of(QueryEvent(schema='app', query='INSERT INTO t VALUES (1)', status_vars=b'\x00\x00\x00\x00\x00'))
        self.assertEqual(body[8], 3)
        self.assertEqual(struct.unpack('<H', body[11:13])[0], 5)
        self.assertEqual(body[13 + 5:13 + 5 + 3], b'app')
        self.assertEqual(body[14 + 3 + 5:], b'INSERT INTO t VALUES (1)')

    def test_load_from_packet(self):
        header = EventHeader(1546300800, QUERY_EVENT)
        source = QueryEvent(schema='app', query='INSERT INTO t VALUES (1)', status_vars=charset_status_vars(45))
        source.thread_id = 12
        source.error_code = 0
        event = QueryEvent.loadFromPacket(header, body_of(source))
        self.assertEqual(event.schema, 'app')
        self.assertEqual(event.query, 'INSERT INTO t VALUES (1)')
        self.assertEqual(event.thread_id, 12)
        self.assertEqual(event.timestamp, 1546300800)

    def test_empty_schema(self):
        event = QueryEvent.loadFromPacket(EventHeader(), body_of(QueryEvent(query='BEGIN')))
        self.assertEqual(event.schema, '')
        self.assertEqual(event.query, 'BEGIN')

    def test_query_decoded_with_client_charset(self):
        # 8 is latin1_swedish_ci
        source = QueryEvent(schema='app', query=b"INSERT INTO t VALUES ('caf\xe9')", status_vars=charset_status_vars(8))
        event = QueryEvent.loadFromPacket(EventHeader(), body_of(source))
        self.assertEqual(event.query, "INSERT INTO t VALUES ('café')")

    def test_query_defaults_to_utf8(self):
        source = QueryEvent(schema='app', query="INSERT INTO t VALUES ('café')")
        event = QueryEvent.loadFromPacket(EventHeader(), body_of(source))
        self.assertEqual(event.query, "INSERT INTO t VALUES ('café')")

    def test_client_encoding(self):
        self.assertEqual(client_encoding(charset_status_vars(45)), 'utf-8')
        self.assertEqual(client_encoding(charset_status_vars(8)), 'cp1252')
        self.assertEqual(client_encoding(charset_status_vars(9999)), 'utf-8')
        self.assertEqual(client_encoding(b''), 'utf-8')
        # truncated catalog var
        self.assertEqual(client_encoding(b'\x02\x10abc'), 'utf-8')

    def test_parse_status_vars_stops_at_unknown_code(self):
        values = parse_status_vars(b'\x00\x01\x00\x00\x00' + b'\x63\x01' + charset_status_vars(8, flags2=False))
        self.assertEqual(values, {Q_FLAGS2_CODE: b'\x01\x00\x00\x00'})

    def test_parse_status_vars_variable_lengths(self):
        status_vars = (b'\x06\x03std'
                       + b'\x05\x06+00:00'
                       + b'\x0b\x04root\x09localhost'
                       + b'\x0c\x02app\x00log\x00'
                       + charset_status_vars(33, flags2=False))
        values = parse_status_vars(status_vars)
        self.assertEqual(values[6], b'\x03std')
        self.assertEqual(values[5], b'\x06+00:00')
        self.assertEqual(values[11], b'\x04root\x09localhost')
        self.assertEqual(values[12], b'\x02app\x00log\x00')
        self.assertEqual(values[Q_CHARSET_CODE], struct.pack('<HHH', 33, 33, 33))

    def test_short_body_is_invalid(self):
        with self.assertRaises(InvalidBinlogError):
            QueryEvent.loadFromPacket(EventHeader(), b'\x00' * 12)

    def test_lengths_beyond_body_are_invalid(self):
        body = bytearray(body_of(QueryEvent(schema='app', query='')))
        body[8] = 200
        with self.assertRaises(InvalidBinlogError):
            QueryEvent.loadFromPacket(EventHeader(), bytes(body))


class TestOtherEvents(unittest.TestCase):

    def test_rotate_event(self):
        body = body_of(RotateEvent('mysql-bin.000002', position=4))
        self.assertEqual(body[:8], b'\x04' + b'\x00' * 7)
        event = RotateEvent.loadFromPacket(EventHeader(), body)
        self.assertEqual(event.position, 4)
        self.assertEqual(event.next_binlog, 'mysql-bin.000002')

    def test_intvar_event(self):
        event = IntvarEvent.loadFromPacket(EventHeader(), body_of(IntvarEvent(LAST_INSERT_ID_EVENT, 42)))
        self.assertEqual(event.intvar_type, LAST_INSERT_ID_EVENT)
        self.assertEqual(event.value, 42)

    def test_intvar_keeps_low_32_bits(self):
        event = IntvarEvent.loadFromPacket(EventHeader(), body_of(IntvarEvent(INSERT_ID_EVENT, 0x100000005)))
        self.assertEqual(event.value, 5)

    def test_hexdump(self):
        dumped = hexdump(bytes(range(0x61, 0x61 + 18)), title='Letters')
        lines = dumped.split('\n')
        self.assertEqual(lines[0], 'Letters')
        self.assertTrue(lines[1].startswith('00000000  61 62 63 64 65 66 67 68  69 6A'))
        self.assertTrue(lines[1].endswith('abcdefgh ijklmnop'))
        self.assertTrue(lines[2].startswith('00000010  71 72'))
        self.assertTrue(lines[2].endswith('qr'))
