# coding=utf-8
import logging

logger = logging.getLogger('py_mysql_binlogtailer')


def hexdump(packet, title='Packet Dump'):
    """
    Format a buffer as offset / hex / printable columns

    >>> print(hexdump(b'\\xfebin', title='Magic'))
    Magic
    00000000  FE 62 69 6E                                        .bin
    """
    offset = 0
    lines = [title]

    while offset < len(packet):
        line = hex(offset)[2:].zfill(8).upper()
        line += '  '

        for x in range(16):
            if offset + x >= len(packet):
                line += '   '
            else:
                line += hex(packet[offset + x])[2:].upper().zfill(2)
                line += ' '
            if x == 7:
                line += ' '

        line += '  '

        for x in range(16):
            if offset + x >= len(packet):
                break
            if packet[offset + x] < 32 or packet[offset + x] >= 127:
                line += '.'
            else:
                line += chr(packet[offset + x])

            if x == 7:
                line += ' '

        lines.append(line.rstrip())
        offset += 16

    return '\n'.join(lines)


def dump(packet, title='Packet Dump'):
    """
    Dumps a packet to the logger
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug(hexdump(packet, title))
