import configparser
import logging
import os
import sys

from py_mysql_binlogtailer.channel import CallbackChannel
from py_mysql_binlogtailer.lib.log import init_logger
from py_mysql_binlogtailer.notification import Error, LogStarted, Query, Rotated, ServerStopped
from py_mysql_binlogtailer.tailer import BinlogTailer

logger = logging.getLogger()


def load_config(conf_file=None):
    config = configparser.ConfigParser()
    config.read_dict({
        "Tailer": {"poll_interval": "1.0"},
        "Logging": {"level": str(logging.INFO), "log_name": "binlog-tailer", "log_dir": ""},
    })
    conf_file = conf_file or os.path.dirname(__file__) + "/example.conf"
    if not config.read(conf_file):
        raise FileNotFoundError("Config file not found: %s" % conf_file)
    return config


def log_notification(notification):
    if isinstance(notification, Query):
        logger.info("Query on %s at %s: %s%s" % (notification.database, notification.timestamp, notification.text,
                                                  " %r" % (notification.auto_increment,)
                                                  if notification.auto_increment else ""))
    elif isinstance(notification, LogStarted):
        logger.info("Binlog %s started at %s" % (notification.file_path, notification.timestamp))
    elif isinstance(notification, ServerStopped):
        logger.info("Server stopped at %s" % notification.timestamp)
    elif isinstance(notification, Rotated):
        logger.info("Rotated to %s" % notification.next_file_path)
    elif isinstance(notification, Error):
        logger.error("Tailing failed: %s" % notification.cause)


def build_tailer(config, callback=log_notification):
    return BinlogTailer(config["Tailer"]["index_file"],
                        channel=CallbackChannel(callback),
                        poll_interval=config["Tailer"].getfloat("poll_interval"))


def main(argv=None):
    argv = sys.argv if argv is None else argv
    config = load_config(len(argv) > 1 and argv[1] or None)

    init_logger(config["Logging"]["log_name"], config["Logging"].getint("level"),
                log_dir=config["Logging"]["log_dir"] or None)

    tailer = build_tailer(config)
    logger.info("Start Binlog Tailer on %s" % config["Tailer"]["index_file"])

    try:
        tailer.run()
    except KeyboardInterrupt:
        session = tailer.session
        logger.info("Stop Binlog Tailer on %s at %s %s" % (config["Tailer"]["index_file"],
                                                           session.path if session else None,
                                                           session.offset if session else 0))


if __name__ == "__main__":
    main()
