"""Configuration for the CAS strategy."""

import os
from dataclasses import dataclass, fields
from pathlib import Path

import structlog
import yaml

logger = structlog.get_logger()

ENV_VARIABLES = {
    "base": "CAS_BASE_URL",
    "login_route": "CAS_LOGIN_ROUTE",
    "validate_route": "CAS_VALIDATE_ROUTE",
    "logout_route": "CAS_LOGOUT_ROUTE",
    "server_url": "CAS_SERVER_URL",
}


@dataclass(frozen=True)
class CasOptions:
    """CAS server routes and the public URL of this server."""

    base: str  # base URL of the CAS server
    login_route: str
    validate_route: str
    logout_route: str
    server_url: str  # public URL of the server using CAS authentication


def load_options_from_env() -> CasOptions:
    """Build CAS options from ``CAS_*`` environment variables.

    Raises:
        ValueError: If any variable is missing or empty
    """
    values = {name: os.getenv(variable, "") for name, variable in ENV_VARIABLES.items()}
    missing = [ENV_VARIABLES[name] for name, value in values.items() if not value]
    if missing:
        logger.error("CAS configuration incomplete", missing=missing)
        raise ValueError(
            f"Missing CAS configuration environment variables: {', '.join(missing)}"
        )
    return CasOptions(**values)


class ConfigLoader:
    """Loads CAS options from the ``cas`` section of a YAML file."""

    def __init__(self, config_file: str = "/etc/cas-auth/config.yaml"):
        self.config_file = Path(config_file)

    def load(self) -> CasOptions:
        """Load CAS options from the YAML file.

        Raises:
            ValueError: If the file is missing or the ``cas`` section is incomplete
        """
        if not self.config_file.exists():
            logger.error("CAS config file does not exist", file=str(self.config_file))
            raise ValueError(f"CAS config file not found: {self.config_file}")

        with open(self.config_file) as f:
            content = yaml.safe_load(f)

        section = content.get("cas") if isinstance(content, dict) else None
        if not isinstance(section, dict):
            raise ValueError(f"No 'cas' section in {self.config_file}")

        names = [f.name for f in fields(CasOptions)]
        missing = [name for name in names if not section.get(name)]
        if missing:
            logger.error(
                "CAS config section incomplete",
                file=str(self.config_file),
                missing=missing,
            )
            raise ValueError(f"Missing CAS settings: {', '.join(missing)}")

        logger.info("Loaded CAS configuration", file=str(self.config_file))
        return CasOptions(**{name: str(section[name]) for name in names})


def get_config_loader() -> ConfigLoader:
    """Get configured config loader instance."""
    config_file = os.getenv("CAS_CONFIG_PATH", "/etc/cas-auth/config.yaml")
    return ConfigLoader(config_file)
