from dependency_injector import providers
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Container, Provider

from nypl.hold_eligibility.eligibility.checker import EligibilityChecker
from nypl.hold_eligibility.eligibility.configuration import EligibilityConfiguration
from nypl.hold_eligibility.policy.patron_type import PatronTypeMapping
from nypl.hold_eligibility.service.logging.configuration import LoggingConfiguration
from nypl.hold_eligibility.service.logging.container import Logging
from nypl.hold_eligibility.sierra.configuration import SierraConfiguration
from nypl.hold_eligibility.sierra.container import SierraContainer


class Services(DeclarativeContainer):
    config = providers.Configuration()

    logging = Container(
        Logging,
        config=config.logging,
    )

    sierra = Container(
        SierraContainer,
        config=config.sierra,
    )

    policy_lookup: Provider[PatronTypeMapping] = providers.Singleton(
        PatronTypeMapping.load, config.eligibility.ptype_mapping
    )

    checker: Provider[EligibilityChecker] = providers.Singleton(
        EligibilityChecker,
        client_factory=sierra.client.provider,
        policy_lookup=policy_lookup,
        holds_limit=config.eligibility.holds_limit,
        probe_backoff_factor=config.eligibility.probe_backoff_factor,
    )


def create_container() -> Services:
    container = Services()
    container.config.from_dict(
        {
            "logging": LoggingConfiguration().model_dump(),
            "sierra": SierraConfiguration().model_dump(),
            "eligibility": EligibilityConfiguration().model_dump(),
        }
    )
    return container
