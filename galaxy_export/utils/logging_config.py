import logging

import colorlog


def setup_logging(level="INFO"):
    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        '%(log_color)s%(asctime)s %(levelname)s: %(message)s',
        datefmt='%H:%M:%S',
        log_colors={
            'DEBUG':    'cyan',
            'INFO':     'green',
            'WARNING':  'yellow',
            'ERROR':    'red',
            'CRITICAL': 'bold_red',
        }
    ))

    root = colorlog.getLogger()
    root.handlers = []
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def log_header(title):
    l = 30 - len(title) // 2
    logging.info(f"\n\n{'=' * l} {title} {'=' * l}")
