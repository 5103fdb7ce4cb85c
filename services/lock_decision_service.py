"""
Lock decision engine.

Composes the identity resolver, the activity existence checker and the
employer fallback into one boolean decision:

1. Incomplete identity or no configured activity types: unlocked, nothing is
   looked up.
2. No matching contact: unlocked.
3. Contact has a qualifying activity: locked.
4. Otherwise, with check_employer, the employer's activities are checked the
   same way.
5. Otherwise: unlocked.

Every collaborator failure counts as "no match", so a broken CRM connection
never blocks a legitimate submission.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.decision import LockDecision
from domain.identity import IdentityInput
from domain.lock_rule import LockRuleConfig
from services.activity_checker import ActivityExistenceChecker
from services.collaborators import (
    ActivityStore,
    ContactDirectory,
    MarkupRenderer,
    RelationshipStore,
)
from services.employer_resolver import EmployerFallbackResolver
from services.identity_resolver import IdentityResolver

logger = logging.getLogger(__name__)


class LockDecisionEngine:
    def __init__(
        self,
        identity_resolver: IdentityResolver,
        activity_checker: ActivityExistenceChecker,
        employer_resolver: EmployerFallbackResolver,
        renderer: MarkupRenderer,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._identity_resolver = identity_resolver
        self._activity_checker = activity_checker
        self._employer_resolver = employer_resolver
        self._renderer = renderer
        self._log = log or logger

    def decide(self, identity: IdentityInput, config: LockRuleConfig) -> LockDecision:
        if not identity.is_complete() or not config.is_configured():
            return LockDecision.unlocked()

        subject = self._identity_resolver.resolve(identity)
        if subject is None:
            return LockDecision.unlocked()

        if self._activity_checker.exists(subject, config.activity_type_ids, config.status_ids):
            self._log.info(
                "Activity lock applies to contact",
                extra={"subject": str(subject), "via_employer": False},
            )
            return self._locked(config)

        if config.check_employer:
            employer = self._employer_resolver.employer_of(
                subject, config.employer_relationship_type_id
            )
            if employer is not None and self._activity_checker.exists(
                employer, config.activity_type_ids, config.status_ids
            ):
                self._log.info(
                    "Activity lock applies via employer",
                    extra={"subject": str(subject), "employer": str(employer), "via_employer": True},
                )
                return self._locked(config)

        return LockDecision.unlocked()

    def _locked(self, config: LockRuleConfig) -> LockDecision:
        return LockDecision.locked_with(
            self._renderer.render(config.lock_message, config.lock_message_format)
        )


def build_decision_engine(
    directory: ContactDirectory,
    activity_store: ActivityStore,
    relationship_store: RelationshipStore,
    renderer: MarkupRenderer,
    log: Optional[logging.Logger] = None,
) -> LockDecisionEngine:
    """Wire the engine and its resolvers to one set of collaborators."""

    return LockDecisionEngine(
        identity_resolver=IdentityResolver(directory, log=log),
        activity_checker=ActivityExistenceChecker(activity_store, log=log),
        employer_resolver=EmployerFallbackResolver(relationship_store, log=log),
        renderer=renderer,
        log=log,
    )
