import inspect
import json
import logging
import string
import textwrap
import typing as t

import pygments
from pygments.formatters import Terminal256Formatter
from pygments.lexers.data import JsonLexer  # pyright: ignore [reportMissingTypeStubs]
from pygments.style import Style

from .json import JSONEncoder
from .style import LogStyle

# attributes every LogRecord carries; whatever else is on a record came from extra={...}
RecordAttributes = frozenset(logging.makeLogRecord({}).__dict__) | {
    "asctime",
    "exception",
    "id",
    "log_color",
    "message",
    "taskName",
}


class ExtraFormatter(logging.Formatter):
    """Appends the record's `extra={...}` fields to the message as JSON.

    Formatting of the message itself is delegated to `base` (e.g.
    `colorlog.ColoredFormatter`). When the handler writes to a terminal the
    JSON is highlighted with pygments.
    """

    def __init__(
        self,
        base: type[logging.Formatter],
        format: str | None,
        datefmt: str | None = None,
        indent: bool | None = True,
        pyg_style: type[Style] = LogStyle,
        style: t.Literal["%", "{", "$"] = "%",
        validate: bool = True,
        *,
        defaults: t.Any = None,
        **kwargs: t.Any,
    ):
        self.base = base(format, datefmt=datefmt, style=style, validate=validate, defaults=defaults, **kwargs)
        self.pyg_style = pyg_style
        self.indent = bool(indent)
        self.encoder = JSONEncoder()
        self.handler: logging.Handler | None = None

    def format(self, record: logging.LogRecord) -> str:
        self._align_continuation_lines(record)
        message = self.base.format(record)

        extra = {k: v for k, v in record.__dict__.items() if k not in RecordAttributes}
        if not extra:
            return message

        if self.handler is None:
            self.handler = self._calling_handler()

        js = json.dumps(extra, sort_keys=True, indent=4 if self.indent else None, default=self.encoder.default)
        if self._colorize():
            js = pygments.highlight(js, JsonLexer(), Terminal256Formatter(style=self.pyg_style))  # pyright: ignore
        return f"{message} {js.strip()}"

    def _align_continuation_lines(self, record: logging.LogRecord) -> None:
        msg = record.getMessage()
        if "\n" not in msg:
            return

        # indent following lines to start under the first line's message text
        formatted = self.base.format(record)
        prefix = formatted[: formatted.find(msg)]
        pad = " " * sum(1 for c in prefix if c in string.printable)
        first, *rest = msg.splitlines()
        record.msg = record.message = first + "\n" + textwrap.indent("\n".join(rest), pad)
        record.args = None

    def _colorize(self) -> bool:
        stream = getattr(self.handler, "stream", None)
        if stream is None or not stream.isatty():
            return False
        return not getattr(self.base, "no_color", False)

    @staticmethod
    def _calling_handler() -> logging.Handler | None:
        # the frame above format() is the Handler.format() that called it
        frame = inspect.currentframe()
        caller = frame.f_back.f_back if frame is not None and frame.f_back is not None else None
        owner = caller.f_locals.get("self") if caller is not None else None
        return owner if isinstance(owner, logging.Handler) else None

    def __getattr__(self, name: str) -> t.Any:
        return getattr(self.base, name)
