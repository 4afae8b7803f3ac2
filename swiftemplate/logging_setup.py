import logging
import sys
import structlog

# every module logs under this name; generated swift goes to stdout, so logs stay on stderr.
APP_LOGGER_NAME = "swiftemplate"

def configure_logging(log_level_str: str = "warning", force_json_logs: bool = False):
    # configures structlog for console (or json) output on stderr.
    # events logged while a source file is being compiled carry an `input_file` key,
    # bound through structlog.contextvars by the compiler.
    log_level = getattr(logging, log_level_str.upper(), logging.WARNING)
    structlog.contextvars.clear_contextvars()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=shared_processors + [
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if force_json_logs:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.setLevel(log_level)
    app_logger.propagate = False

    structlog.get_logger(__name__).info(
        "logging_configured", level=log_level_str, renderer="json" if force_json_logs else "console",
    )
