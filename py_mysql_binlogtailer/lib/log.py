# coding=utf-8
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s %(levelname)s [%(process)d] %(filename)s %(message)s '


def init_logger(log_name=None, level=logging.INFO, logger=None, log_dir=None):
    """Log to a rotating file under log_dir and to stdout"""
    if logger is None:
        logger = logging.getLogger()
    script_dir, name = os.path.split(os.path.abspath(sys.argv[0]))
    if log_name:
        name = log_name
    if not log_dir:
        log_dir = os.path.join(os.path.dirname(script_dir), 'log')

    log_filename = os.path.join(log_dir, name.replace(".py", "") + '.log')
    fmt = logging.Formatter(LOG_FORMAT)

    if not os.path.isdir(log_dir):
        os.makedirs(log_dir)

    # 10M per file
    file_handler = RotatingFileHandler(log_filename, mode='a', maxBytes=10240000, backupCount=100,
                                       encoding="utf8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(fmt)
    logger.addHandler(stdout_handler)
    logger.setLevel(level)

    return logger
