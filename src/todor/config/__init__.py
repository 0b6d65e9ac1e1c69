"""Configuration resolution for todor.

Classes
-------
TodoRBuilder
    Collects defaults, config files, added tags and overrides.

Configuration
    The resolved, immutable result of :meth:`TodoRBuilder.build`.

ConfigFragment
    One decoded layer of configuration.

CommentsConfig
    Comment types for a group of extensions.

Examples
--------
>>> from todor.config import TodoRBuilder
>>> config = TodoRBuilder().add_config_file(".todor").add_tag("hack").build()
>>> config.tags
('TODO', 'FIXME', 'HACK')
"""

from todor.config.builder import (
    Configuration,
    TodoRBuilder,
    default_config,
    merge,
    merge_fragments,
)
from todor.config.fragment import CommentsConfig, ConfigFragment
from todor.config.loader import (
    global_config_path,
    load_config_file,
    load_global_config,
    write_example_config,
)

__all__ = [
    "CommentsConfig",
    "ConfigFragment",
    "Configuration",
    "TodoRBuilder",
    "default_config",
    "global_config_path",
    "load_config_file",
    "load_global_config",
    "merge",
    "merge_fragments",
    "write_example_config",
]
