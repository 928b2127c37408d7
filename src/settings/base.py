import logging
import os
from typing import Any, List, TypeVar

from dotenv import load_dotenv

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseSettings:
    """
    Base class for application settings.
    Provides helpers for reading typed values from environment variables.
    """

    # Tracks whether .env has been loaded
    _dotenv_loaded = False

    @classmethod
    def ensure_dotenv_loaded(cls):
        """
        Make sure the .env file has been loaded (only once per process).
        """
        if not cls._dotenv_loaded:
            dotenv_path = os.environ.get("DOTENV_PATH")
            if dotenv_path and os.path.exists(dotenv_path):
                load_dotenv(dotenv_path=dotenv_path)
                logger.info(f"Loaded environment from: {dotenv_path}")
            else:
                for path in [".env", "../.env"]:
                    if os.path.exists(path):
                        load_dotenv(dotenv_path=path)
                        logger.info(f"Loaded environment from: {path}")
                        break

            BaseSettings._dotenv_loaded = True

    @classmethod
    def get_env(
        cls, name: str, default: Any = None, required: bool = False
    ) -> Any:
        """
        Read a value from the environment.

        Args:
            name: Environment variable name
            default: Value returned when the variable is not set
            required: Raise ValueError when the variable is not set

        Returns:
            The variable's value or the default
        """
        cls.ensure_dotenv_loaded()

        value = os.environ.get(name)

        if value is None:
            if required:
                raise ValueError(
                    f"Required environment variable is not set: {name}"
                )
            return default

        return value

    @classmethod
    def get_bool_env(cls, name: str, default: bool = False) -> bool:
        """
        Read a boolean from the environment.

        Args:
            name: Environment variable name
            default: Value returned when unset or unrecognised

        Returns:
            bool: Parsed value
        """
        value = cls.get_env(name)
        if value is None:
            return default

        if value.strip().lower() in ("true", "yes", "1", "t", "y"):
            return True
        elif value.strip().lower() in ("false", "no", "0", "f", "n", ""):
            return False

        logger.warning(
            f"Value '{value}' for {name} is not a boolean. Using default: {default}"
        )
        return default

    @classmethod
    def get_int_env(cls, name: str, default: int = 0) -> int:
        """
        Read an integer from the environment.

        Args:
            name: Environment variable name
            default: Value returned when unset or not a number

        Returns:
            int: Parsed value
        """
        value = cls.get_env(name)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning(
                f"Value '{value}' for {name} is not an integer. Using default: {default}"
            )
            return default

    @classmethod
    def get_float_env(cls, name: str, default: float = 0.0) -> float:
        """
        Read a float from the environment.

        Args:
            name: Environment variable name
            default: Value returned when unset or not a number

        Returns:
            float: Parsed value
        """
        value = cls.get_env(name)
        if value is None:
            return default

        try:
            return float(value)
        except ValueError:
            logger.warning(
                f"Value '{value}' for {name} is not a number. Using default: {default}"
            )
            return default

    @classmethod
    def get_int_list_env(cls, name: str, default: List[int] = None) -> List[int]:
        """
        Read a comma-separated list of integers from the environment.

        Blank items are ignored, so an empty variable yields an empty list.
        Items that are not integers are skipped with a warning.

        Args:
            name: Environment variable name
            default: Value returned when the variable is not set

        Returns:
            List[int]: Parsed values
        """
        value = cls.get_env(name)
        if value is None:
            return list(default or [])

        result = []
        for item in value.split(","):
            item = item.strip()
            if not item:
                continue
            try:
                result.append(int(item))
            except ValueError:
                logger.warning(f"Ignoring non-integer item '{item}' in {name}")
        return result
