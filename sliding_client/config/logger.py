#
# This file is licensed under the Affero General Public License (AGPL) version 3.
#
# Copyright (C) 2025 New Vector, Ltd
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# See the GNU Affero General Public License for more details:
# <https://www.gnu.org/licenses/agpl-3.0.html>.
#
#

import logging
import sys
from typing import Any

from pydantic import Field, StrictStr, ValidationError, field_validator

from sliding_client.logging.filter import MetadataFilter
from sliding_client.logging.formatter import LogFormatter
from sliding_client.types import JsonDict
from sliding_client.util import SLIDING_CLIENT_VERSION
from sliding_client.util.pydantic_models import ParseModel

from ._base import Config, ConfigError

DEFAULT_LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(lineno)d - %(levelname)s - %(client)s - %(message)s"
)

_LEVEL_NAMES = frozenset(("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"))


def _check_level(level: str) -> str:
    level = level.upper()
    if level not in _LEVEL_NAMES:
        raise ValueError("Unknown log level %r" % (level,))
    return level


class LoggingConfigModel(ParseModel):
    level: StrictStr = "INFO"
    format: StrictStr = DEFAULT_LOG_FORMAT
    # Overrides of the level of individual loggers, e.g.
    # `sliding_client.handlers.consistency: ERROR`.
    loggers: dict[StrictStr, StrictStr] = Field(default_factory=dict)
    instance_name: StrictStr = "sliding-sync-client"

    @field_validator("level")
    @classmethod
    def _level_validator(cls, level: str) -> str:
        return _check_level(level)

    @field_validator("loggers")
    @classmethod
    def _loggers_validator(cls, loggers: dict[str, str]) -> dict[str, str]:
        return {name: _check_level(level) for name, level in loggers.items()}


class LoggingConfig(Config):
    section = "logging"

    def read_config(self, config: JsonDict, **kwargs: Any) -> None:
        logging_config = config.get("logging") or {}
        if not isinstance(logging_config, dict):
            raise ConfigError("Must be a mapping", ("logging",))

        try:
            parsed = LoggingConfigModel(**logging_config)
        except ValidationError as e:
            raise ConfigError(
                "Could not validate the logging configuration", path=("logging",)
            ) from e

        self.level = parsed.level
        self.format = parsed.format
        self.loggers = parsed.loggers
        self.instance_name = parsed.instance_name


def setup_logging(config: LoggingConfig, stream: Any = None) -> logging.Handler:
    """Configure the python logging appropriately for the client.

    Args:
        config: The logging section of the configuration.
        stream: Where to write logs. Defaults to stderr.

    Returns:
        The handler that was installed on the root logger.
    """
    root_logger = logging.getLogger()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        LogFormatter(config.format, defaults={"client": config.instance_name})
    )
    handler.addFilter(
        MetadataFilter(
            {"client": config.instance_name, "version": SLIDING_CLIENT_VERSION}
        )
    )
    root_logger.addHandler(handler)
    root_logger.setLevel(config.level)

    for name, level in config.loggers.items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured for %s %s", config.instance_name, SLIDING_CLIENT_VERSION
    )
    return handler
