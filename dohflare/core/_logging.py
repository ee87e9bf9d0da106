import logging
import sys

from loguru import logger

_CONSOLE_FORMAT = (
    '<green>{time:HH:mm:ss}</green> '
    '<level>{level: <7}</level> '
    '<level>{message}</level>'
)

# stdlib loggers used by the transport stack
_HTTP_LOGGERS = ('httpx', 'httpcore', 'hpack')


class _LoguruBridge(logging.Handler):
    '''
    Hands records of the http transport loggers over to loguru,
    prefixed with the name of the emitting logger.
    '''

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(exception=record.exc_info).log(
            level, f'{record.name}: {record.getMessage()}'
        )


def enable_console_logging(level: str = 'INFO') -> int:
    '''
    Turns on dohflare logging to stderr for interactive runs,
    httpx/httpcore records are bridged into the same sink.

    Parameters
    ----------
    level : str, optional
        by default 'INFO'

    Returns
    -------
    int
        _The loguru sink id, pass it to `disable_logging`_
    '''
    bridge = _LoguruBridge()
    for name in _HTTP_LOGGERS:
        http_logger = logging.getLogger(name)
        http_logger.handlers = [bridge]
        http_logger.setLevel(level)
        http_logger.propagate = False

    logger.enable('dohflare')
    return logger.add(
        sys.stderr,
        format=_CONSOLE_FORMAT,
        level=level,
        colorize=True,
        diagnose=False,
    )


def disable_logging(sink_id: int | None = None) -> None:
    '''
    Silences dohflare again and detaches the transport bridge.
    '''
    if sink_id is not None:
        logger.remove(sink_id)
    logger.disable('dohflare')
    for name in _HTTP_LOGGERS:
        http_logger = logging.getLogger(name)
        http_logger.handlers = []
        http_logger.propagate = True
