"""Configuration parser for the trie benchmarks."""

import string
from pathlib import Path
from typing import Optional, cast

DEFAULT_CHARSET = string.ascii_lowercase


class ConfigBoolParsingError(Exception):
    """Raised when the parsing of bool strings in
    the config file was not successful.
    """


class ConfigNotFoundError(Exception):
    """Raised when any of the required configuration settings is
    not provided.
    """


class ConfigValueError(Exception):
    """Raised when configuration settings are present but inconsistent."""


class BenchmarkConfig:
    """A class to save benchmark configuration settings."""

    def __init__(
        self,
        count: int,
        min_length: int,
        max_length: int,
        charset: str = DEFAULT_CHARSET,
        plot: bool = True,
        data_path: Optional[Path] = None,
    ) -> None:
        """Initialize the benchmark configuration.

        Args:
            count (int): The number of random samples to generate.
            min_length (int): The minimum length of a sample.
            max_length (int): The exclusive maximum length of a sample.
            charset (str): The symbols samples are drawn from.
            plot (bool): Whether to save a chart of the timings.
            data_path (Optional[Path]): A key file to benchmark instead
            of random samples.

        """
        self.count = count
        self.min_length = min_length
        self.max_length = max_length
        self.charset = charset
        self.plot = plot
        self.data_path = data_path

    def __repr__(self) -> str:
        """Return a string representation of the configuration object.

        Returns:
            str: A formatted string representing the configuration settings.

        """
        return f"""
                Benchmark configuration settings:
                Sample count: {self.count}
                Sample length: {self.min_length}..{self.max_length}
                Charset: {self.charset}
                Plot enabled: {"YES" if self.plot else "NO"}
                Data path: {self.data_path if self.data_path else "NONE"}
            """


def parse_bool(key: str, val: str) -> bool:
    """Parse given values into boolean ones (True or False).

    Args:
        key (str): The key to parse the boolean for.
        val (str): The value to be parsed to boolean.

    Raises:
        ConfigBoolParsingError: If an error occured
        while parsing the value to boolean.

    Returns:
        bool: True or False depending on the output of the parser.

    """
    if val.strip().lower() in {"true", "1", "yes"}:
        return True
    if val.strip().lower() in {"false", "0", "no"}:
        return False

    raise ConfigBoolParsingError(
        f"Invalid boolean value for key '{key}' in the configuration file. "
        "Expected 'true', 'false', '1', '0', 'yes', or 'no' "
        "(case-insensitive).",
    )


def validate_config(config: BenchmarkConfig) -> None:
    """Check that the configuration settings fit together.

    Args:
        config (BenchmarkConfig): The parsed configuration.

    Raises:
        ConfigValueError: If a setting is out of range.

    """
    if config.count < 0:
        raise ConfigValueError(
            f"'count' must not be negative, got {config.count}.",
        )
    if config.min_length < 0:
        raise ConfigValueError(
            f"'min_length' must not be negative, got {config.min_length}.",
        )
    if config.max_length <= config.min_length:
        raise ConfigValueError(
            f"'max_length' ({config.max_length}) must be greater than "
            f"'min_length' ({config.min_length}).",
        )
    if not config.charset:
        raise ConfigValueError("'charset' must not be empty.")


def load_config_file(config_file_path: Path) -> BenchmarkConfig:
    """Load and parse the configuration file.

    Args:
        config_file_path (Path): Path to the config file.

    Raises:
        ConfigNotFoundError: If required settings are missing.
        ConfigValueError: If settings are out of range.
        FileNotFoundError: If a file does not exist.

    Returns:
        BenchmarkConfig: Parsed config object.

    """
    if not config_file_path.exists():
        raise FileNotFoundError(
            f"Missing required configuration file: '{config_file_path}'. "
            "Please ensure the file exists and the path is correct.",
        )

    # Initialize variables for required config values
    count = min_length = max_length = None
    charset = DEFAULT_CHARSET
    plot = True
    data_path: Optional[Path] = None

    # Open and read the configuration file line by line
    with config_file_path.open("r", encoding="utf-8") as file:
        for line in file:
            line = line.strip()

            # Skip blank lines and comments
            if not line or line.startswith("#"):
                continue

            # Split the line into key and value
            key, sep, value = line.partition("=")
            if sep != "=":
                continue

            key = key.strip().lower()
            value = value.strip()

            # Parse and assign configuration values based on key
            if key == "count":
                count = int(value)
            elif key == "min_length":
                min_length = int(value)
            elif key == "max_length":
                max_length = int(value)
            elif key == "charset":
                charset = value
            elif key == "plot":
                plot = parse_bool("plot", value)
            elif key == "data_path":
                data_path = Path(value)

    # Collect required configuration values for validation
    required = {
        "count": count,
        "min_length": min_length,
        "max_length": max_length,
    }

    # Check for missing required configuration values
    for key, val in required.items():
        if val is None:
            raise ConfigNotFoundError(
                f"Missing required configuration: '{key}'. "
                f"Please ensure the config file includes a valid line for "
                f"'{key}'.",
            )

    # Check if the data file exists
    if data_path is not None and not data_path.exists():
        raise FileNotFoundError(
            f"The required file {data_path} doesn't exist.",
        )

    config = BenchmarkConfig(
        cast("int", count),
        cast("int", min_length),
        cast("int", max_length),
        charset,
        plot,
        data_path,
    )
    validate_config(config)
    return config
