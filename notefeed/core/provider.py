import datetime
import inspect
import logging.config
import typing as t

from .logging import TRACE, TraceLogLevelLogger

TimestampProvider = t.Callable[..., datetime.datetime]


class LoggingProvider(object):
    """Configures stdlib logging from the `logging` settings section.

    Installed as a container resource, so configuration happens once per
    process, before anything asks for a logger.
    """

    def __init__(self, config: dict[str, t.Any], debug: bool):
        LoggingProvider.install_trace_level()
        logging.config.dictConfig(config)
        self.capture_warnings(debug)

    @staticmethod
    def install_trace_level() -> None:
        logging.setLoggerClass(TraceLogLevelLogger)
        logging.addLevelName(TRACE, "TRACE")

    @staticmethod
    def get_logger(name: str | None = None, n_frames: int = 1) -> TraceLogLevelLogger:
        """Logger for `name`, or for the module of the calling frame."""
        if name is None:
            frame = inspect.stack()[n_frames].frame
            name = frame.f_globals["__name__"]
        return t.cast(TraceLogLevelLogger, logging.getLogger(name))

    @staticmethod
    def capture_warnings(capture: bool) -> None:
        logging.captureWarnings(capture)
