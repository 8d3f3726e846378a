import os
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib  # pyright: ignore[reportMissingImports]


CONFIG_ENVIRONMENT_VARIABLE = 'HDCOMPARE_CONFIG'

# Settings key constants
SETTING_LOGGING_PATH = 'logging.path'
SETTING_LOGGING_LEVEL = 'logging.level'
SETTING_HASH_PROGRAM = 'hash.program'

DEFAULT_HASH_PROGRAM = 'hashdeep'


class Settings:
    """Read-only view of an optional hdcompare settings file.

    The file is TOML. Its location is given explicitly (the --config option) or by the
    HDCOMPARE_CONFIG environment variable. Without either, or if the file is absent, every
    get() call returns its default.

    Example settings.toml:
        [logging]
        path = "/var/log/hdcompare.log"
        level = "DEBUG"

        [hash]
        program = "/opt/hashdeep/bin/hashdeep"
    """

    def __init__(self, config_path: str | os.PathLike | None = None):
        """Load settings.

        Args:
            config_path: Path to the settings file. Falls back to $HDCOMPARE_CONFIG when None.

        Raises:
            tomllib.TOMLDecodeError: The settings file is not valid TOML
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENVIRONMENT_VARIABLE)

        self._config_path = None if config_path is None else Path(config_path)
        self._settings = {}

        if self._config_path is not None and self._config_path.exists():
            with open(self._config_path, 'rb') as f:
                self._settings = tomllib.load(f)

    @property
    def config_path(self) -> Path | None:
        return self._config_path

    def get(self, key: str, default=None):
        """Look up a dotted key such as SETTING_HASH_PROGRAM ('hash.program').

        Returns default when any part of the key is missing or names a value that is not a table.
        """
        node = self._settings
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node
