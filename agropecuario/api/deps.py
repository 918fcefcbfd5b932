"""FastAPI dependencies for dependency injection.

The coordinator, clock and settings are built once in ``create_app`` and
kept on ``app.state``; routes receive them through these dependencies.
"""

from typing import Annotated

from fastapi import Depends, Request

from agropecuario.config import Settings
from agropecuario.core.clock import Clock
from agropecuario.core.coordinator import IntegrityCoordinator


def get_coordinator(request: Request) -> IntegrityCoordinator:
    """Get the application's integrity coordinator."""
    return request.app.state.coordinator


def get_clock(request: Request) -> Clock:
    """Get the application's regional clock."""
    return request.app.state.clock


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was built with."""
    return request.app.state.settings


# Type aliases for cleaner annotations
CoordinatorDep = Annotated[IntegrityCoordinator, Depends(get_coordinator)]
ClockDep = Annotated[Clock, Depends(get_clock)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
