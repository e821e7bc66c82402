from .config import (
    LoggingConfig as LoggingConfig,
    StreamType as StreamType,
)
from .models import (
    Entry as Entry,
    Log as Log,
    LogLevel as LogLevel,
    LogLevelName as LogLevelName,
)
from .streams import (
    Logger as Logger,
    LoggerContext as LoggerContext,
    LoggerStream as LoggerStream,
)


def configure_logging(env) -> LoggingConfig:
    """Apply the ``DNSCONF_LOG_*`` settings of an ``Env`` to the logging config."""
    config = LoggingConfig()
    config.update(
        log_directory=env.DNSCONF_LOGS_DIRECTORY,
        log_level=env.DNSCONF_LOG_LEVEL,
        log_output=env.DNSCONF_LOG_OUTPUT,
    )

    return config
