"""Core ticket-creation functionality."""

from .auth import Claim, ClaimTypes, ClaimValueTypes, IdentityTicket, ProviderToken
from .mapping import (
    ClaimMappingRule,
    apply_claim_rules,
    custom,
    first_with,
    json_key,
    json_sub_key,
    last_segment,
    merge_claims,
)
from .profile import NodeKind, PathNotFoundError, ProfileNode, ProviderProfile
from .ticket import CreatingTicketContext, TicketBuilder, TicketResult, TicketState

__all__ = [
    "Claim",
    "ClaimTypes",
    "ClaimValueTypes",
    "IdentityTicket",
    "ProviderToken",
    "ClaimMappingRule",
    "apply_claim_rules",
    "custom",
    "first_with",
    "json_key",
    "json_sub_key",
    "last_segment",
    "merge_claims",
    "NodeKind",
    "PathNotFoundError",
    "ProfileNode",
    "ProviderProfile",
    "CreatingTicketContext",
    "TicketBuilder",
    "TicketResult",
    "TicketState",
]
