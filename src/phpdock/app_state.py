from dataclasses import dataclass

from phpdock.app_config import AppConfig


@dataclass
class AppState:
    app_config: AppConfig
