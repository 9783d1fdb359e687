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

import argparse
import logging
import os
from typing import Any, ClassVar, Iterable, Iterator, TypeVar

import yaml

from sliding_client.types import JsonDict, StrSequence

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Represents a problem parsing the configuration

    Args:
        msg: A textual description of the error.
        path: Where appropriate, an indication of where in the configuration
           the problem lies.
    """

    def __init__(self, msg: str, path: StrSequence | None = None):
        super().__init__(msg)
        self.msg = msg
        self.path = path


def format_config_error(e: ConfigError) -> Iterator[str]:
    """
    Formats a config error neatly

    The idea is to format the immediate error, plus the "causes" of those errors,
    hopefully in a way that makes sense to the user. For example:

        Error in configuration at 'sliding_sync.debounce_ms':
          Could not validate the sliding sync configuration
            caused by: Input should be greater than 0
    """
    yield "Error in configuration"

    if e.path:
        yield " at '%s'" % (".".join(e.path),)

    yield ":\n  %s" % (e.msg,)

    parent_e = e.__cause__
    indent = 1
    while parent_e:
        indent += 1
        yield ":\n%scaused by: %s" % ("  " * indent, str(parent_e))
        parent_e = parent_e.__cause__


class Config:
    """
    A configuration section, containing configuration keys and values.

    Attributes:
        section: The section title of this config object, such as
            "sliding_sync" or "logging". This is used to make it accessible on
            the root config as `root.sliding_sync`.
    """

    section: ClassVar[str]

    def __init__(self, root_config: "RootConfig"):
        self.root = root_config

    def read_config(self, config: JsonDict, **kwargs: Any) -> None:
        """Read the parts of `config` this section is responsible for.

        Raises:
            ConfigError: if the configuration is invalid.
        """


TRootConfig = TypeVar("TRootConfig", bound="RootConfig")


class RootConfig:
    """
    Holder of an application's configuration.

    What configuration this object holds is defined by `config_classes`, a list
    of Config classes that will be instantiated and given the contents of a
    configuration file to read. They can then be accessed on this class by their
    section name, defined in the Config or dynamically set to be the name of the
    class, lower-cased and with "Config" removed.
    """

    config_classes: ClassVar[list[type[Config]]] = []

    def __init__(self, config_files: Iterable[str] = ()):
        self.config_files = list(config_files)
        for config_class in self.config_classes:
            section = getattr(config_class, "section", None)
            if section is None:
                raise ValueError("%r requires a section name" % (config_class,))

            try:
                conf = config_class(self)
            except Exception as e:
                raise Exception("Failed making %s: %r" % (section, e))
            setattr(self, section, conf)

    def invoke_all(self, func_name: str, *args: Any, **kwargs: Any) -> dict[str, Any]:
        """
        Invoke a function on all instantiated config objects this RootConfig is
        configured to use.

        Args:
            func_name: Name of function to invoke
            *args
            **kwargs

        Returns:
            ordered dictionary of config section name and the result of the
            function from it.
        """
        res = {}
        for config_class in self.config_classes:
            config = getattr(self, config_class.section)
            if hasattr(config, func_name):
                res[config_class.section] = getattr(config, func_name)(*args, **kwargs)
        return res

    def parse_config_dict(
        self, config_dict: JsonDict, config_dir_path: str = ""
    ) -> None:
        """Read the information from the config dict into this Config object.

        Args:
            config_dict: Configuration data, as read from the yaml
            config_dir_path: The path where the config files are kept. Used to
                resolve relative paths in the config.
        """
        self.invoke_all("read_config", config_dict, config_dir_path=config_dir_path)

    @classmethod
    def load_config(
        cls: type[TRootConfig], description: str, argv: list[str]
    ) -> TRootConfig:
        """Parse the commandline and config files

        Doesn't support config-file-generation: used by the tools.

        Returns:
            Config object.

        Raises:
            ConfigError: if no config file was given, or the file is invalid.
        """
        config_parser = argparse.ArgumentParser(description=description)
        config_parser.add_argument(
            "-c",
            "--config-path",
            action="append",
            metavar="CONFIG_FILE",
            help="Specify config file. Can be given multiple times and"
            " may specify directories containing *.yaml files.",
        )
        config_args = config_parser.parse_args(argv)

        if not config_args.config_path:
            raise ConfigError(
                "Must supply a config file.\nA config file can be specified with"
                " -c CONFIG-FILE."
            )

        config_files = find_config_files(search_paths=config_args.config_path)
        config_dict = read_config_files(config_files)

        obj = cls(config_files)
        config_dir_path = os.path.dirname(config_files[-1]) if config_files else ""
        obj.parse_config_dict(config_dict, config_dir_path=config_dir_path)
        return obj


def read_config_files(config_files: Iterable[str]) -> JsonDict:
    """Read the config files and shallowly merge them into a dict.

    Successive configurations are shallowly merged into ones provided earlier,
    i.e., entirely replacing top-level sections of the configuration.

    Args:
        config_files: A list of the config files to read

    Returns:
        The configuration dictionary.
    """
    specified_config: JsonDict = {}
    for config_file in config_files:
        with open(config_file) as file_stream:
            yaml_config = yaml.safe_load(file_stream)

        if yaml_config is None:
            continue

        if not isinstance(yaml_config, dict):
            err = "File %r is empty or doesn't parse into a key-value map. IGNORING."
            logger.warning(err, config_file)
            continue

        specified_config.update(yaml_config)

    return specified_config


def find_config_files(search_paths: list[str]) -> list[str]:
    """Finds config files using a list of search paths. If a path is a file
    then that file path is added to the list. If a search path is a directory
    then all the "*.yaml" files in that directory are added to the list in
    sorted order.

    Args:
        search_paths: A list of paths to search.

    Returns:
        A list of file paths.
    """

    config_files = []
    for config_path in search_paths:
        if os.path.isdir(config_path):
            # We accept specifying directories as config paths, we search
            # inside that directory for all files matching *.yaml, and then
            # we apply them in *sorted* order.
            files = []
            for entry in os.listdir(config_path):
                entry_path = os.path.join(config_path, entry)
                if not os.path.isfile(entry_path):
                    continue
                if entry.startswith(".") or not entry.endswith(".yaml"):
                    continue
                files.append(entry_path)

            config_files.extend(sorted(files))
        else:
            config_files.append(config_path)
    return config_files
