from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from phpdock.libs.functions.docker_compose import PHP_INI_LOCATION


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PHPDOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data: dict[str, Any] = Field(
        default={},
        validation_alias=AliasChoices("data", "PHPDOCK_DATA"),
    )
    options_files: list[Path] = Field(
        default=[
            Path("project.yaml"),
            Path("project.yml"),
        ],
        validation_alias=AliasChoices(
            "options_files",
            "options-files",
            "PHPDOCK_OPTIONS_FILES",
        ),
    )
    output_dir: Path = Field(
        default=Path("."),
        validation_alias=AliasChoices("output_dir", "output-dir", "PHPDOCK_OUTPUT_DIR"),
    )
    php_ini_location: str = Field(
        default=PHP_INI_LOCATION,
        validation_alias=AliasChoices(
            "php_ini_location", "php-ini-location", "PHPDOCK_PHP_INI_LOCATION"
        ),
    )


@lru_cache(maxsize=1)
def load_app_config(paths: Sequence[Path]) -> AppConfig:
    class LoadedAppConfig(AppConfig):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (
                init_settings,
                env_settings,
                dotenv_settings,
                file_secret_settings,
                *(
                    YamlConfigSettingsSource(
                        settings_cls, yaml_file=path, yaml_file_encoding="utf-8"
                    )
                    for path in paths
                ),
            )

    return LoadedAppConfig()
