import importlib
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

CONFIG_ENV = "RECIPE_API_CONFIG"
DB_URL_ENV = "RECIPE_API_DB_URL"
LOG_LEVEL_ENV = "RECIPE_API_LOG_LEVEL"


@dataclass
class Route:
    """
    Represents a route in the service.
    """

    method: str
    path: str
    request_model: Optional[Any]
    response_model: Optional[Any]
    handler: str
    status_code: int
    description: Optional[str]
    tags: List[str]


@dataclass
class Service:
    """
    Represents a service with its configuration, including routes and database.
    """

    name: str
    version: str
    title: str
    db: str
    routes: List[Route]


@dataclass
class Config:
    """
    Represents the entire configuration of the application, including all services.
    """

    urlPrefix: str
    title: str
    version: str
    logLevel: str
    corsOrigins: List[str]
    services: Dict[str, Service] = field(default_factory=dict)


def load_model(ref: Optional[str]):
    """
    Loads a model class from a string reference.
    Handles optional `List` types by checking for `[]` suffix.
    """
    if not ref:
        return None

    is_list = ref.endswith("[]")
    if is_list:
        ref = ref[:-2]

    module_name, class_name = ref.rsplit(".", 1)
    module = importlib.import_module(module_name)
    cls = getattr(module, class_name)

    if is_list:
        return List[cls]

    return cls


def parse_route(route_data: dict) -> Route:
    """
    Parses a dictionary of route configurations into a Route object.
    """
    return Route(
        method=route_data["method"],
        path=route_data["path"],
        request_model=load_model(route_data.get("request_model")),
        response_model=load_model(route_data.get("response_model")),
        handler=route_data["handler"],
        status_code=int(route_data.get("status_code", 200)),
        description=route_data.get("description"),
        tags=route_data.get("tags", []),
    )


def parse_service(service_data: dict) -> Service:
    """
    Parses a dictionary of service configurations into a Service object.
    The database URL can be overridden through the environment.
    """
    return Service(
        name=service_data["name"],
        title=service_data["title"],
        version=service_data["version"],
        db=os.environ.get(DB_URL_ENV) or service_data["db"],
        routes=[parse_route(route) for route in service_data.get("routes", [])],
    )


def default_config_path() -> str:
    BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(BASE_DIR, "config.yaml")


def get_config(path: Optional[str] = None) -> Config:
    """
    Loads and parses the entire application configuration.

    The file is looked up in this order: the explicit ``path`` argument,
    the ``RECIPE_API_CONFIG`` environment variable, then ``config.yaml``
    at the project root.
    """
    config_file = path or os.environ.get(CONFIG_ENV) or default_config_path()
    with open(config_file, "r") as f:
        raw_config = yaml.safe_load(f)

    services = {
        name: parse_service({"name": name, **data})
        for name, data in raw_config["services"].items()
    }

    config = Config(
        urlPrefix=raw_config.get("urlPrefix", ""),
        title=raw_config["title"],
        version=raw_config["version"],
        logLevel=os.environ.get(LOG_LEVEL_ENV) or raw_config.get("logLevel", "INFO"),
        corsOrigins=raw_config.get("corsOrigins", ["*"]),
        services=services,
    )
    return config


def get_config_for_service(name: str, config: Optional[Config] = None) -> Service:
    """
    Retrieves the configuration for a specific service by its name.
    """
    svc = (config or get_config()).services.get(name)
    if svc:
        return svc
    raise ValueError(f"Service with name {name} not found.")
