from .literals import (
    CONFIG_SEARCH_PATHS,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOGS_PATH,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_PORTAL_TIMEOUT_SECS,
    OUTPUT_FORMAT_WIEGAND26,
    OUTPUT_FORMAT_WIEGAND64
)

from dataclasses import dataclass, field, is_dataclass
from typing import Optional, Any, Type, TypeVar
import os
import logging

from dotenv import load_dotenv
import yaml


logger = logging.getLogger(__name__)


@dataclass
class LoggingConfiguration:
    path: str = DEFAULT_LOGS_PATH
    console_level: str = DEFAULT_CONSOLE_LOG_LEVEL


@dataclass
class PortalConfiguration:
    url_get_plates_list: Optional[str] = None
    timeout_secs: float = DEFAULT_PORTAL_TIMEOUT_SECS


@dataclass
class OutputConfiguration:
    format: str = DEFAULT_OUTPUT_FORMAT


@dataclass
class Configuration:
    logging: LoggingConfiguration = field(default_factory=LoggingConfiguration)
    portal: PortalConfiguration = field(default_factory=PortalConfiguration)
    output: OutputConfiguration = field(default_factory=OutputConfiguration)


class ConfigBuilder:

    dicts: list[dict]

    def __init__(self, dicts: Optional[list[dict]] = None) -> None:
        self.dicts = dicts if dicts is not None else []

        # load variables from {cwd}/.env into environment
        load_dotenv()

    def add_yaml(self, yaml_path: str) -> None:

        if not os.path.exists(yaml_path):
            raise FileNotFoundError(yaml_path)

        with open(yaml_path, 'r') as stream:
            logger.debug("loading and parsing yaml from '%s'", yaml_path)
            try:
                content = yaml.safe_load(stream)
            except yaml.YAMLError as exc:
                logger.error("unable to parse '%s': %s", yaml_path, exc)
                raise

        # an empty file parses to None
        if content is not None:
            self.dicts.append(content)

    def get_key(self, key: str, default: Optional[Any] = None) -> Any:
        """
            get_key('some.config.key') retrieves:
                - dict['some']['config']['key']
                - ENV variable 'SOME_CONFIG_KEY'

            yaml sources are searched in the order they were added
        """
        keys = key.split(".")

        source_dict: dict[str, Any]
        for source_dict in self.dicts:
            lev = source_dict
            for k in keys:
                if not isinstance(lev, dict) or k not in lev:
                    lev = None
                    break
                lev = lev[k]
            if lev is not None:
                return lev

        # Search Environment Variables
        env_key = key.replace('.', '_').upper()
        return os.environ.get(env_key, default)


def get_config(config_path: Optional[str] = None) -> Configuration:
    """build the configuration from yaml, .env and environment variables

    Args:
        config_path (Optional[str]): explicit config file; searched paths
            are used when omitted

    Raises:
        FileNotFoundError: explicit config_path does not exist
        ValueError: output format or console log level is not recognised

    Returns:
        Configuration: populated configuration
    """
    builder = ConfigBuilder()

    if config_path is not None:
        builder.add_yaml(config_path)
    else:
        found_config: bool = False
        for search_path in CONFIG_SEARCH_PATHS:
            if os.path.exists(search_path):
                logger.debug("found config file at '%s'", search_path)
                builder.add_yaml(search_path)
                found_config = True

        if not found_config:
            logger.debug("no config.yml found; using environment and defaults")

    cfg = {}

    cfg['logging'] = {}
    # env fallback is LOGS_PATH
    cfg['logging']['path'] = builder.get_key('logs.path', DEFAULT_LOGS_PATH)
    cfg['logging']['console_level'] = \
        str(builder.get_key('logs.console_level', DEFAULT_CONSOLE_LOG_LEVEL)).upper()

    # getLevelName maps known level names to their int value
    if not isinstance(logging.getLevelName(cfg['logging']['console_level']), int):
        raise ValueError(f"unknown log level '{cfg['logging']['console_level']}'")

    cfg['portal'] = {}
    cfg['portal']['url_get_plates_list'] = builder.get_key('portal.url_get_plates_list')
    cfg['portal']['timeout_secs'] = \
        float(builder.get_key('portal.timeout_secs', DEFAULT_PORTAL_TIMEOUT_SECS))

    cfg['output'] = {}
    cfg['output']['format'] = \
        str(builder.get_key('output.format', DEFAULT_OUTPUT_FORMAT)).lower()

    if cfg['output']['format'] not in (OUTPUT_FORMAT_WIEGAND26, OUTPUT_FORMAT_WIEGAND64):
        raise ValueError(f"unknown output format '{cfg['output']['format']}'")

    config = from_dict(Configuration, cfg)
    return config


DataclassType = TypeVar("DataclassType")


def from_dict(dataclass_type: Type[DataclassType], dictionary: dict[str, Any]) -> DataclassType:
    field_values = {}
    for name, value in dictionary.items():
        field_type = dataclass_type.__annotations__.get(name, None)

        # Check if the field is a dataclass
        if field_type and is_dataclass(field_type):
            value = from_dict(field_type, value)

        field_values[name] = value

    return dataclass_type(**field_values)
