import pytest

from phpdock.libs.schemas.options import (
    ElasticsearchOptions,
    GlobalOptions,
    MailhogOptions,
    MysqlOptions,
    PhpOptions,
    ProjectOptions,
)


@pytest.fixture
def minimal_options():
    """Default project with no optional services."""
    return ProjectOptions()


@pytest.fixture
def mysql_options():
    return MysqlOptions(
        version="8.0",
        root_password="root",
        database_name="app",
        username="user",
        password="secret",
    )


@pytest.fixture
def full_options(mysql_options):
    """Project with every optional service enabled."""
    return ProjectOptions(
        global_options=GlobalOptions(base_port=8081, project_name="SSmysite"),
        php=PhpOptions(version="8.2.x"),
        mailhog=MailhogOptions(),
        mysql=mysql_options,
        elasticsearch=ElasticsearchOptions(version="8.13.0"),
    )
