import contextvars
import logging
import pathlib
import sys

import pendulum
import seqlog

_root_logger = logging.getLogger()

# tags every record emitted while handling one request or task run
flow_id_var = contextvars.ContextVar("flow_id", default=None)


class ContextFilter(logging.Filter):
    def filter(self, record):
        record.flow_id = flow_id_var.get()
        return True


def set_flow_id(flow_id):
    return flow_id_var.set(flow_id)


def reset_flow_id(token):
    flow_id_var.reset(token)


def get_log_path(filename: str) -> pathlib.Path:
    if sys.platform == "darwin":
        path = f"~/logs/{filename}.log"
    elif sys.platform == "linux":
        path = f"/app-logs/{filename}.log"
    else:
        path = f"~\\app-logs\\{filename}.log"

    return pathlib.Path(path).expanduser()


def setup_logging_to_file(
    app: str,
    level: int = logging.INFO,
    *,
    logger: logging.Logger = _root_logger,
    timestamp: bool = True,
) -> pathlib.Path:
    formatter = logging.Formatter(
        "%(asctime)s.%(msecs)03d [%(levelname)s] [%(flow_id)s] %(name)s.%(funcName)s:%(lineno)d %(message)s"
    )
    if timestamp:
        filename = f"{app}.{pendulum.now():%Y%m%d.%H%M%S.%f}"
    else:
        filename = app
    log_path = get_log_path(filename)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path)
    file_handler.formatter = formatter
    file_handler.addFilter(ContextFilter())
    logger.setLevel(level)
    logger.addHandler(file_handler)
    return log_path


def setup_logging_to_console(level=logging.INFO, *, logger: logging.Logger = _root_logger):
    if not sys.stdout.isatty():
        return

    from rich.logging import RichHandler
    from rich.traceback import install

    install(show_locals=True)
    logger.setLevel(level)
    handler = RichHandler(rich_tracebacks=True, level=level, show_time=True)
    logger.addHandler(handler)


def setup_seq_logging(server_url, api_key=None, level=logging.INFO):
    if not server_url:
        return False

    seqlog.log_to_seq(
        server_url=server_url,
        api_key=api_key,
        level=level,
        batch_size=10,
        auto_flush_timeout=2,
        override_root_logger=True,
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(ContextFilter())
    return True
