# coding=utf-8
"""
Notifications published by the tailer.

They are the only objects that leave the tailer, and they are immutable.
"""
import collections

AutoIncrementCarry = collections.namedtuple('AutoIncrementCarry', ['last_insert_id', 'auto_increment'])

LogStarted = collections.namedtuple('LogStarted', ['timestamp', 'file_path'])

Query = collections.namedtuple('Query', ['timestamp', 'database', 'text', 'auto_increment'])
Query.__new__.__defaults__ = (None,)

ServerStopped = collections.namedtuple('ServerStopped', ['timestamp'])

Rotated = collections.namedtuple('Rotated', ['next_file_path'])

Error = collections.namedtuple('Error', ['cause'])
