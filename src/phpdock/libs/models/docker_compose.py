from pydantic import BaseModel, ConfigDict

DOCKER_COMPOSE_FILE_VERSION = "3.1"


class DockerComposeServiceModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Field order is the key order of the rendered service block.
    image: str | None = None
    build: str | None = None
    working_dir: str | None = None
    volumes: tuple[str, ...] | None = None
    environment: tuple[str, ...] | None = None
    ports: tuple[str, ...] | None = None


class DockerComposeModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = DOCKER_COMPOSE_FILE_VERSION
    services: dict[str, DockerComposeServiceModel]
