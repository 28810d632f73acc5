import os
from typing import Callable

from util.singleton import Singleton


class Config(metaclass = Singleton):

    log_level: str
    default_dialect: str

    def __init__(
        self,
        def_log_level: str = "INFO",
        def_default_dialect: str = "commonmark",
    ):
        # @formatter:off
        self.log_level = self.__env("LOG_LEVEL", lambda: def_log_level).lower()
        self.default_dialect = self.__env("MARKDOWN_DIALECT", lambda: def_default_dialect).lower()
        # @formatter:on

    @staticmethod
    def __env(name: str, default: Callable[[], str]) -> str:
        env_value = os.environ.get(name, "").strip()
        return env_value if env_value else default()


config = Config()
