from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar

from jinja2 import Environment

from phpdock.libs.functions.docker_compose import (
    DOCKER_COMPOSE_FILENAME,
    PHP_INI_LOCATION,
    render_docker_compose,
)
from phpdock.libs.functions.nginx_conf import (
    NGINX_CONF_FILENAME,
    create_environment,
    render_nginx_conf,
)
from phpdock.libs.schemas.options import ProjectOptions


@dataclass(frozen=True)
class GeneratedFile:
    filename: str
    contents: str


@dataclass(kw_only=True)
class FileGenerator(ABC):
    filename: ClassVar[str]

    @abstractmethod
    def get_contents(self, options: ProjectOptions) -> str: ...

    def generate(self, options: ProjectOptions) -> GeneratedFile:
        return GeneratedFile(filename=self.filename, contents=self.get_contents(options))


@dataclass(kw_only=True)
class DockerComposeGenerator(FileGenerator):
    filename: ClassVar[str] = DOCKER_COMPOSE_FILENAME
    php_ini_location: str = PHP_INI_LOCATION

    def get_contents(self, options: ProjectOptions) -> str:
        return render_docker_compose(options, php_ini_location=self.php_ini_location)


@dataclass(kw_only=True)
class NginxConfGenerator(FileGenerator):
    filename: ClassVar[str] = NGINX_CONF_FILENAME
    env: Environment = field(default_factory=create_environment)

    def get_contents(self, options: ProjectOptions) -> str:
        return render_nginx_conf(options, env=self.env)


def generate_files(
    options: ProjectOptions,
    generators: Sequence[FileGenerator] | None = None,
) -> list[GeneratedFile]:
    if generators is None:
        generators = [DockerComposeGenerator(), NginxConfGenerator()]

    return [generator.generate(options) for generator in generators]
