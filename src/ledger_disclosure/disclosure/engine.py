"""
Disclosure policy engine.
Applies the redaction set of a requester's tier to a view bundle.
"""

from dataclasses import replace
from typing import Optional, Union
import logging

from ..models.views import SECTIONS, AuthorizationTier, RedactionOutcome, ViewBundle
from ..utils.exceptions import UnknownTierWarning
from .rules import FIELD_CATALOG, DisclosurePolicy, FieldSpec

logger = logging.getLogger(__name__)


class DisclosurePolicyEngine:
    """
    Stateless redaction of view bundles by authorization tier.

    The policy tables are shared read-only; every call builds a fresh
    outcome and leaves the input bundle untouched.
    """

    def __init__(self, policy: Optional[DisclosurePolicy] = None):
        """
        Initialize the engine.

        Args:
            policy: Redaction tables; the default tables when omitted
        """
        self.policy = policy or DisclosurePolicy.default()

    def resolve_tier(
        self, claim: Union[AuthorizationTier, str, None]
    ) -> tuple[AuthorizationTier, Optional[UnknownTierWarning]]:
        """
        Resolve an authorization claim to a tier.

        Args:
            claim: Tier enum value or raw claim string

        Returns:
            Tuple of (tier, warning); the warning is set when the claim was
            not recognized and degraded to UNKNOWN
        """
        if isinstance(claim, AuthorizationTier):
            return claim, None

        tier = AuthorizationTier.parse(claim)
        if AuthorizationTier.is_recognized(claim):
            return tier, None

        warning = UnknownTierWarning(claim)
        logger.warning(str(warning))
        return tier, warning

    def apply(
        self, bundle: ViewBundle, tier: Union[AuthorizationTier, str, None]
    ) -> RedactionOutcome:
        """
        Redact a view bundle for the given tier.

        Args:
            bundle: Views to disclose; absent sections are skipped
            tier: Requester tier or raw authorization claim

        Returns:
            Redaction outcome with a new bundle and the sorted redacted paths
        """
        resolved, warning = self.resolve_tier(tier)
        rule_paths = self.policy.paths_for(resolved)

        applicable = sorted(
            path for path in rule_paths if bundle.has_section(FIELD_CATALOG[path].section)
        )

        redacted_bundle = _redact_bundle(bundle, [FIELD_CATALOG[p] for p in applicable])

        logger.debug(
            f"Disclosure for tier {resolved.value}: redacted {len(applicable)} field(s) "
            f"{applicable}"
        )

        return RedactionOutcome(
            bundle=redacted_bundle,
            tier=resolved,
            redacted_fields=tuple(applicable),
            was_masked=bool(rule_paths),
            warnings=(warning,) if warning else (),
        )


def _redact_bundle(bundle: ViewBundle, specs: list[FieldSpec]) -> ViewBundle:
    """Build a copy of the bundle with the given fields nulled."""
    by_section: dict[str, dict[str, None]] = {}
    for spec in specs:
        # Every redactable sensitivity class is nulled
        by_section.setdefault(spec.section, {})[spec.attribute] = None

    changes = {}
    for section, nulled in by_section.items():
        attr = SECTIONS[section]
        changes[attr] = replace(getattr(bundle, attr), **nulled)

    return replace(bundle, **changes)
