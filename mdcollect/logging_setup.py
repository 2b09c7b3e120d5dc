import logging
import sys
import structlog

def configure_logging(log_level_str: str = "warning", force_json_logs: bool = False):
    # routes structlog through the "mdcollect" stdlib logger on stderr, console or json rendered.
    log_level = getattr(logging, log_level_str.upper(), logging.WARNING)

    processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]
    if force_json_logs:
        # json lines carry a timestamp and a flattened traceback.
        processors += [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ]
    processors.append(structlog.stdlib.ProcessorFormatter.wrap_for_formatter)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if force_json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer))

    app_logger = logging.getLogger("mdcollect")
    app_logger.handlers.clear()
    app_logger.addHandler(handler)
    app_logger.setLevel(log_level)

    structlog.get_logger(__name__).debug("logging_configured", level=log_level_str, json=force_json_logs)
