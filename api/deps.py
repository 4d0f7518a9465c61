"""
API dependencies.

Provides dependency injection for services.
"""

import logging
from typing import Optional, Annotated
from dataclasses import dataclass

from fastapi import Depends

from parent_auth.config import load_config, Config
from parent_auth.services import AuthService, create_auth_service

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Container for all services."""
    config: Config
    auth: AuthService


# Global services instance (singleton)
_services: Optional[Services] = None


def get_services() -> Services:
    """
    Get or create the services singleton.

    This initializes all services on first call.
    """
    global _services

    if _services is None:
        logger.info("Initializing services...")

        config = load_config()
        auth = create_auth_service(config)

        _services = Services(config=config, auth=auth)

        logger.info(f"Services initialized, store file: {config.store.data_file}")

    return _services


def close_services():
    """Drop the services singleton."""
    global _services
    if _services:
        _services = None
        logger.info("Services closed")


# Dependency for getting services
def services_dep() -> Services:
    """FastAPI dependency for services."""
    return get_services()


ServicesDep = Annotated[Services, Depends(services_dep)]
