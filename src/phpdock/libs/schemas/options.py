import re
from pathlib import Path
from typing import Annotated, Any, ClassVar

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)


def _reject_float(value: Any) -> Any:
    # `7.10` in YAML or a dotlist override arrives as the float 7.1.
    if isinstance(value, float):
        raise ValueError(
            f"{value!r} was read as a number, quote it to keep it as text (e.g. '7.10')"
        )
    return value


def _read_secret(value: Any) -> Any:
    value = _reject_float(value)
    if not isinstance(value, str):
        return value

    if value.startswith("@@"):
        return value[1:]

    if value.startswith("@"):
        path = Path(value[1:])
        if not path.is_file():
            raise ValueError(f"Secret file not found: {path}")
        return path.read_text(encoding="utf-8").strip()

    return value


Text = Annotated[str, BeforeValidator(_reject_float)]
# Credentials may be given as `@path/to/file`; `@@` escapes a literal `@`.
Secret = Annotated[str, BeforeValidator(_read_secret)]


class _Options(BaseModel):
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, coerce_numbers_to_str=True
    )


class GlobalOptions(_Options):
    base_port: int = Field(
        default=8081,
        ge=1025,
        le=65535,
        description="Host port for nginx; other exposed services are offset from it.",
        validation_alias=AliasChoices("base_port", "basePort", "base-port"),
    )
    project_name: str = Field(
        default="SSmysite",
        min_length=1,
        examples=["One Ring"],
        validation_alias=AliasChoices("project_name", "projectName", "project-name"),
    )
    app_path: str = Field(
        default=".",
        validation_alias=AliasChoices("app_path", "appPath", "app-path"),
    )
    docker_working_dir: str = Field(
        default="/var/www/html",
        validation_alias=AliasChoices(
            "docker_working_dir", "dockerWorkingDir", "docker-working-dir"
        ),
    )

    @property
    def host_name(self) -> str:
        """Lowercased project name with whitespace runs replaced by `-`."""
        return re.sub(r"\s+", "-", self.project_name.strip().lower())


class PhpOptions(_Options):
    version: Text = Field(default="8.3.x", examples=["8.3.x", "8.2.x", "7.4.x"])
    front_controller_path: str = Field(
        default="public/index.php",
        validation_alias=AliasChoices(
            "front_controller_path", "frontControllerPath", "front-controller-path"
        ),
    )

    @property
    def short_version(self) -> str:
        return self.version.replace(".x", "")


class ExposedServiceOptions(_Options):
    external_port_offset: ClassVar[int] = 0

    def external_port(self, base_port: int) -> int:
        return base_port + self.external_port_offset


class MailhogOptions(ExposedServiceOptions):
    external_port_offset: ClassVar[int] = 2


class MysqlOptions(ExposedServiceOptions):
    external_port_offset: ClassVar[int] = 1

    version: Text = Field(default="8.0", examples=["8.0", "5.7"])
    root_password: Secret = Field(
        min_length=1,
        validation_alias=AliasChoices("root_password", "rootPassword", "root-password"),
    )
    database_name: Text = Field(
        min_length=1,
        validation_alias=AliasChoices("database_name", "databaseName", "database-name"),
    )
    username: Text = Field(min_length=1)
    password: Secret = Field(min_length=1)


class ElasticsearchOptions(_Options):
    version: Text = Field(min_length=1, examples=["8.13.0", "7.17.21"])


class ProjectOptions(_Options):
    global_options: GlobalOptions = Field(
        default_factory=GlobalOptions,
        validation_alias=AliasChoices("global_options", "globalOptions", "global"),
    )
    php: PhpOptions = Field(default_factory=PhpOptions)
    mailhog: MailhogOptions | None = None
    mysql: MysqlOptions | None = None
    elasticsearch: ElasticsearchOptions | None = None

    @field_validator("mailhog", "mysql", "elasticsearch", mode="before")
    @classmethod
    def _feature_toggle(cls, value: Any) -> Any:
        # Checkbox-style values: `true` enables with defaults, `false` disables.
        if value is True:
            return {}
        if value is False:
            return None
        return value

    @property
    def has_mailhog(self) -> bool:
        return self.mailhog is not None

    @property
    def has_mysql(self) -> bool:
        return self.mysql is not None

    @property
    def has_elasticsearch(self) -> bool:
        return self.elasticsearch is not None
