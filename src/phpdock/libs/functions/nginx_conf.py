import posixpath
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from phpdock.libs.schemas.options import ProjectOptions

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
NGINX_CONF_TEMPLATE = "nginx.conf.jinja"
NGINX_CONF_FILENAME = ".docker/nginx/nginx.conf"


def create_environment(templates_dir: Path = TEMPLATES_DIR) -> Environment:
    return Environment(
        loader=FileSystemLoader(templates_dir),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,  # noqa: S701
    )


def render_nginx_conf(options: ProjectOptions, env: Environment | None = None) -> str:
    env = env or create_environment()
    front_controller_path = options.php.front_controller_path

    return env.get_template(NGINX_CONF_TEMPLATE).render(
        docker_working_dir=options.global_options.docker_working_dir,
        front_controller_file=posixpath.basename(front_controller_path),
        front_controller_folder=posixpath.dirname(front_controller_path),
        php_fpm_host=f"{options.global_options.host_name}-php-fpm",
    )
