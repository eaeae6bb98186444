"""Claim mapping rules.

A ruleset is an ordered sequence of ``ClaimMappingRule`` values. Applying it
to a ``ProviderProfile`` yields claims in rule order, which keeps the output
deterministic for a given document.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

from .auth import Claim, ClaimValueTypes
from .profile import NodeKind, Path, PathNotFoundError, ProfileNode, ProviderProfile
from ..exceptions.auth import MappingError

logger = logging.getLogger(__name__)

SourceFunction = Callable[[ProviderProfile], Any]
Source = Union[str, Tuple[str, ...], SourceFunction]


@dataclass(frozen=True)
class ClaimMappingRule:
    """How to extract one claim value from a profile document.

    Attributes:
        claim_type: Type of the produced claim
        source: Path into the document, or a callable receiving the
            ``ProviderProfile`` and returning the value (``None`` if absent)
        optional: Skip the claim silently when no value is found
        value_type: ``"string"`` converts values to text, other value types
            keep the decoded JSON value
    """

    claim_type: str
    source: Source
    optional: bool = False
    value_type: str = ClaimValueTypes.STRING

    def extract(self, profile: ProviderProfile) -> Optional[Any]:
        """Extract the claim value, or ``None`` if the document has none.

        Null values and empty strings count as absent.
        """
        if callable(self.source):
            try:
                value = self.source(profile)
            except (LookupError, TypeError, ValueError) as e:
                logger.debug("Claim source for %s failed: %s", self.claim_type, e)
                return None
            if isinstance(value, ProfileNode):
                return self._convert_node(value)
            return self._convert_value(value)

        try:
            node = profile.select(self.source)
        except PathNotFoundError as e:
            logger.debug("No value for claim %s: %s", self.claim_type, e)
            return None
        return self._convert_node(node)

    def _convert_node(self, node: ProfileNode) -> Optional[Any]:
        if node.is_null:
            return None
        if self.value_type == ClaimValueTypes.STRING:
            text = node.to_text()
            return text or None
        value = node.to_python()
        if value == "":
            return None
        return value

    def _convert_value(self, value: Any) -> Optional[Any]:
        if value is None or value == "":
            return None
        if self.value_type == ClaimValueTypes.STRING:
            try:
                return ProfileNode.from_json(value).to_text() or None
            except TypeError:
                return str(value)
        return value


def json_key(
    claim_type: str,
    key: Path,
    optional: bool = True,
    value_type: str = ClaimValueTypes.STRING
) -> ClaimMappingRule:
    """Map a top-level (or dotted) key of the document onto a claim."""
    source = key if isinstance(key, str) else tuple(key)
    return ClaimMappingRule(claim_type, source, optional, value_type)


def json_sub_key(
    claim_type: str,
    key: str,
    sub_key: str,
    optional: bool = True,
    value_type: str = ClaimValueTypes.STRING
) -> ClaimMappingRule:
    """Map ``document[key][sub_key]`` onto a claim."""
    return ClaimMappingRule(claim_type, (key, sub_key), optional, value_type)


def custom(
    claim_type: str,
    resolver: SourceFunction,
    optional: bool = True,
    value_type: str = ClaimValueTypes.STRING
) -> ClaimMappingRule:
    """Map the result of ``resolver(profile)`` onto a claim."""
    return ClaimMappingRule(claim_type, resolver, optional, value_type)


def apply_claim_rules(
    profile: ProviderProfile,
    rules: Sequence[ClaimMappingRule]
) -> List[Claim]:
    """Apply a ruleset to a profile.

    Returns:
        Claims in rule order; optional rules without a value are skipped

    Raises:
        MappingError: If a required rule finds no value
    """
    claims: List[Claim] = []
    for rule in rules:
        value = rule.extract(profile)
        if value is None:
            if rule.optional:
                continue
            raise MappingError(
                f"Required claim '{rule.claim_type}' is missing from the user profile",
                claim_type=rule.claim_type
            )
        claims.append(Claim(rule.claim_type, value))
    return claims


def merge_claims(
    base_claims: Sequence[Tuple[str, Any]],
    mapped_claims: Sequence[Tuple[str, Any]]
) -> List[Claim]:
    """Combine base claims with mapped claims.

    Base claims come first; any base claim whose type is also produced by
    the mapping is dropped so the mapped value wins.
    """
    mapped = [Claim(*claim) for claim in mapped_claims]
    overridden = {claim.type for claim in mapped}
    merged = [Claim(*claim) for claim in base_claims if claim[0] not in overridden]
    merged.extend(mapped)
    return merged


def first_with(sequence_path: Path, key: str, value_key: str, expected: Any = True) -> SourceFunction:
    """Build a source picking ``value_key`` of the first item where ``key == expected``.

    ``first_with("emails", "primary", "value")`` selects the primary
    address of ``{"emails": [{"value": "a@b", "primary": true}]}``.
    """
    def resolve(profile: ProviderProfile) -> Optional[ProfileNode]:
        node = profile.select(sequence_path)
        if node.kind is not NodeKind.SEQUENCE:
            return None
        for item in node.value:
            if item.kind is not NodeKind.MAP:
                continue
            try:
                if item.select((key,)).to_python() == expected:
                    return item.select((value_key,))
            except PathNotFoundError:
                continue
        return None

    return resolve


def last_segment(path: Path, separator: str = "/") -> SourceFunction:
    """Build a source returning the last ``separator``-delimited part of a string value."""
    def resolve(profile: ProviderProfile) -> Optional[str]:
        node = profile.select(path)
        if node.kind is not NodeKind.STRING:
            return None
        return node.value.rstrip(separator).rsplit(separator, 1)[-1]

    return resolve
