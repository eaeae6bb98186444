"""Identity provider definitions.

A provider is a configuration value: endpoint settings plus the claim
mapping rules for its user-information document. ``TicketBuilder`` does the
work for every provider.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from ..config.settings import ProviderConfig
from ..core.auth import ProviderToken
from ..core.mapping import ClaimMappingRule
from ..core.ticket import TicketBuilder, TicketResult


@dataclass(frozen=True)
class ProviderDefinition:
    """Everything the ticket builder needs to know about one provider."""

    name: str
    scheme_name: str
    display_name: str
    config: ProviderConfig
    rules: Tuple[ClaimMappingRule, ...]

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))

    def with_config(self, **changes) -> "ProviderDefinition":
        """Return a copy whose configuration has the given fields replaced."""
        return dataclasses.replace(self, config=self.config.replace(**changes))

    def with_rules(self, *rules: ClaimMappingRule) -> "ProviderDefinition":
        """Return a copy with extra claim mapping rules appended."""
        return dataclasses.replace(self, rules=self.rules + tuple(rules))

    def from_env(self, prefix: Optional[str] = None) -> "ProviderDefinition":
        """Return a copy with configuration overridden from the environment.

        The prefix defaults to the upper-cased provider name, e.g. ``WEIBO_``;
        see ``ProviderConfig.from_env`` for the variables read.
        """
        prefix = prefix if prefix is not None else f"{self.name.upper()}_"
        return dataclasses.replace(
            self, config=ProviderConfig.from_env(prefix, defaults=self.config)
        )

    async def build_ticket(
        self,
        builder: TicketBuilder,
        token: ProviderToken,
        *,
        properties: Optional[Dict[str, Any]] = None,
        base_claims: Sequence[Tuple[str, Any]] = (),
        scheme_name: Optional[str] = None
    ) -> TicketResult:
        """Build a ticket with this provider's configuration and rules."""
        return await builder.build_ticket(
            token,
            self.config,
            self.rules,
            scheme_name=scheme_name or self.scheme_name,
            properties=properties,
            base_claims=base_claims
        )


def configure(
    definition: ProviderDefinition,
    scopes: Optional[Sequence[str]] = None,
    **config_changes
) -> ProviderDefinition:
    """Apply factory overrides to a preset definition."""
    if scopes is not None:
        config_changes["scopes"] = tuple(scopes)
    if not config_changes:
        return definition
    return definition.with_config(**config_changes)
