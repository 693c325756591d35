# coding=utf-8


class Proto(object):
    """
    Little-endian reader over a binlog buffer, plus the matching builders
    """
    __slots__ = ('packet', 'offset')

    def __init__(self, packet, offset=0):
        self.packet = packet
        self.offset = offset

    def has_remaining_data(self):
        return len(self.packet) - self.offset > 0

    def remaining(self):
        return max(len(self.packet) - self.offset, 0)

    @staticmethod
    def build_fixed_int(size, value):
        """
        Build a little-endian fixed int

        >>> Proto.build_fixed_int(1, 0)
        bytearray(b'\\x00')

        >>> Proto.build_fixed_int(2, 0xFFFF)
        bytearray(b'\\xff\\xff')

        >>> Proto.build_fixed_int(4, 0x6e6962fe)
        bytearray(b'\\xfebin')

        >>> Proto.build_fixed_int(8, 255)
        bytearray(b'\\xff\\x00\\x00\\x00\\x00\\x00\\x00\\x00')
        """
        packet = bytearray(size)
        for i in range(size):
            packet[i] = (value >> (8 * i)) & 0xFF
        return packet

    @staticmethod
    def build_fixed_str(size, value):
        """
        Build a fixed string, zero padded up to size

        >>> Proto.build_fixed_str(2, 'ab')
        bytearray(b'ab')

        >>> Proto.build_fixed_str(3, b'ab')
        bytearray(b'ab\\x00')
        """
        if isinstance(value, str):
            value = value.encode('utf-8')
        packet = bytearray(size)
        packet[0:len(value)] = value
        return packet

    @staticmethod
    def build_null_str(value):
        """
        Build a null terminated string

        >>> Proto.build_null_str('app')
        bytearray(b'app\\x00')
        """
        if isinstance(value, str):
            value = value.encode('utf-8')
        return Proto.build_fixed_str(len(value) + 1, value)

    @staticmethod
    def build_eop_str(value):
        """
        Build an end of packet string

        >>> Proto.build_eop_str('ab')
        bytearray(b'ab')
        """
        if isinstance(value, str):
            value = value.encode('utf-8')
        return Proto.build_fixed_str(len(value), value)

    @staticmethod
    def build_filler(size, fill=0x00):
        """
        Build a set of filler

        >>> Proto.build_filler(2, 0xff)
        bytearray(b'\\xff\\xff')
        """
        return bytearray([fill] * size)

    @staticmethod
    def build_byte(value):
        """
        >>> Proto.build_byte(0x0f)
        bytearray(b'\\x0f')
        """
        return bytearray([value])

    @staticmethod
    def get_fixed_int_sniplet(packet):
        """
        Extract a little-endian fixed int from a packet subset

        >>> Proto.get_fixed_int_sniplet(Proto.build_fixed_int(4, 305419896))
        305419896
        """
        value = 0
        for i in range(len(packet) - 1, -1, -1):
            value = (value << 8) | (packet[i] & 0xFF)
        return value

    def get_fixed_int(self, size):
        """
        Extract a fixed int from the current position

        >>> packet = Proto(Proto.build_fixed_int(2, 513))
        >>> packet.get_fixed_int(2)
        513
        """
        value = Proto.get_fixed_int_sniplet(
            self.packet[self.offset:self.offset + size])
        self.offset += size
        return value

    def get_filler(self, size):
        """
        Skip over packet filler

        >>> packet = Proto(bytearray(5))
        >>> packet.get_filler(2)
        >>> packet.offset
        2
        """
        self.offset += size

    def read(self, size):
        """
        Extract raw bytes from the current position

        >>> Proto(b'\\xfebin').read(4)
        b'\\xfebin'
        """
        value = bytes(self.packet[self.offset:self.offset + size])
        self.offset += size
        return value

    def get_fixed_str(self, size, encoding='utf-8'):
        """
        Extract a fixed length string from the current position

        >>> Proto(Proto.build_fixed_str(3, 'app')).get_fixed_str(3)
        'app'
        """
        return self.read(size).decode(encoding, 'replace')

    def get_eop_bytes(self):
        """
        Extract everything up to the end of the packet

        >>> packet = Proto(b'\\x00INSERT', 1)
        >>> packet.get_eop_bytes()
        b'INSERT'
        """
        return self.read(self.remaining())

    def get_eop_str(self, encoding='utf-8'):
        """
        Extract an end of packet string

        >>> Proto(Proto.build_eop_str('BEGIN')).get_eop_str()
        'BEGIN'
        """
        return self.get_eop_bytes().decode(encoding, 'replace')


if __name__ == "__main__":
    import doctest
    doctest.testmod()
