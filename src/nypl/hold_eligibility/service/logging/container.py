from __future__ import annotations

import logging

from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Provider

from nypl.hold_eligibility.service.logging.log import (
    json_stream_handler,
    setup_logging,
)


class Logging(DeclarativeContainer):
    """Configures the root logger when the container's resources are
    initialized."""

    config = providers.Configuration()

    handler: Provider[logging.Handler] = providers.Singleton(json_stream_handler)

    setup = providers.Resource(
        setup_logging,
        level=config.level,
        verbose_level=config.verbose_level,
        handler=handler,
    )
