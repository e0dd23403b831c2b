import itertools
import re
from collections.abc import Mapping
from types import MappingProxyType

import yaml

from phpdock.libs.functions.nginx_conf import NGINX_CONF_FILENAME
from phpdock.libs.models.docker_compose import (
    DockerComposeModel,
    DockerComposeServiceModel,
)
from phpdock.libs.schemas.options import ProjectOptions

DOCKER_COMPOSE_FILENAME = "docker-compose.yml"
DOCKER_DIR = ".docker"
PHP_INI_LOCATION = "php-fpm/php-ini-overrides.ini"

HEADER = (
    f"{'#' * 79}\n"
    f"#{'Generated on phpdocker.io':^77}#\n"
    f"{'#' * 79}\n"
    "\n"
)

_SERVICE_BLOCK_PATTERN = re.compile(r"^ {4}[a-zA-Z_]+", re.MULTILINE)


def _default_volume(options: ProjectOptions) -> str:
    global_options = options.global_options
    return f"{global_options.app_path}:{global_options.docker_working_dir}"


def _mailhog(options: ProjectOptions) -> DockerComposeServiceModel | None:
    if options.mailhog is None:
        return None

    ext_port = options.mailhog.external_port(options.global_options.base_port)
    return DockerComposeServiceModel(
        image="mailhog/mailhog:latest",
        ports=(f"{ext_port}:8025",),
    )


def _mysql(options: ProjectOptions) -> DockerComposeServiceModel | None:
    mysql = options.mysql
    if mysql is None:
        return None

    ext_port = mysql.external_port(options.global_options.base_port)
    return DockerComposeServiceModel(
        image=f"mysql:{mysql.version}",
        working_dir=options.global_options.docker_working_dir,
        volumes=(_default_volume(options),),
        environment=(
            f"MYSQL_ROOT_PASSWORD={mysql.root_password}",
            f"MYSQL_DATABASE={mysql.database_name}",
            f"MYSQL_USER={mysql.username}",
            f"MYSQL_PASSWORD={mysql.password}",
        ),
        ports=(f"{ext_port}:3306",),
    )


def _elasticsearch(options: ProjectOptions) -> DockerComposeServiceModel | None:
    if options.elasticsearch is None:
        return None

    return DockerComposeServiceModel(
        image=f"elasticsearch:{options.elasticsearch.version}",
    )


def _webserver(options: ProjectOptions) -> DockerComposeServiceModel:
    return DockerComposeServiceModel(
        image="nginx:alpine",
        working_dir=options.global_options.docker_working_dir,
        volumes=(
            _default_volume(options),
            f"./{NGINX_CONF_FILENAME}:/etc/nginx/conf.d/default.conf",
        ),
        ports=(f"{options.global_options.base_port}:80",),
    )


def _php_fpm(
    options: ProjectOptions, php_ini_location: str
) -> DockerComposeServiceModel:
    short_version = options.php.short_version
    return DockerComposeServiceModel(
        build=f"{DOCKER_DIR}/php-fpm",
        working_dir=options.global_options.docker_working_dir,
        volumes=(
            _default_volume(options),
            f"./{DOCKER_DIR}/{php_ini_location}:/etc/php/{short_version}/fpm/conf.d/99-overrides.ini",
        ),
    )


def build_services(
    options: ProjectOptions,
    *,
    php_ini_location: str = PHP_INI_LOCATION,
) -> Mapping[str, DockerComposeServiceModel]:
    project_name = options.global_options.project_name.lower()

    services = (
        ("mailhog", _mailhog(options)),
        ("mysql", _mysql(options)),
        ("elasticsearch", _elasticsearch(options)),
        ("webserver", _webserver(options)),
        ("php-fpm", _php_fpm(options, php_ini_location)),
    )

    return MappingProxyType(
        {
            f"{project_name}-{role}": service
            for role, service in services
            if service is not None
        }
    )


def build_compose(
    options: ProjectOptions,
    *,
    php_ini_location: str = PHP_INI_LOCATION,
) -> DockerComposeModel:
    return DockerComposeModel(
        services=dict(build_services(options, php_ini_location=php_ini_location)),
    )


class _IndentedDumper(yaml.SafeDumper):
    """Dumper that indents block sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def dump_compose(compose: DockerComposeModel) -> str:
    return yaml.dump(
        compose.model_dump(mode="json", exclude_none=True),
        Dumper=_IndentedDumper,
        indent=4,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=float("inf"),
    )


def _prepend_header(rendered_yaml: str) -> str:
    return HEADER + rendered_yaml


def _add_empty_lines_between_items(rendered_yaml: str) -> str:
    counter = itertools.count()

    def matcher(match: re.Match[str]) -> str:
        if next(counter) == 0:
            return match.group(0)
        return "\n" + match.group(0)

    return _SERVICE_BLOCK_PATTERN.sub(matcher, rendered_yaml)


def tidy_yaml(rendered_yaml: str) -> str:
    return _add_empty_lines_between_items(_prepend_header(rendered_yaml))


def render_docker_compose(
    options: ProjectOptions,
    *,
    php_ini_location: str = PHP_INI_LOCATION,
) -> str:
    return tidy_yaml(
        dump_compose(build_compose(options, php_ini_location=php_ini_location))
    )
