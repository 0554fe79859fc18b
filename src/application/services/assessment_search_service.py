"""Assessment search service.

Two read paths:

- search_assessments: store search followed by owner enrichment through
  the user directory. Used by the create path's uniqueness check.
- plain_search: paginated search without owner enrichment. Pagination is
  normalized first (limit clamped to max_search_limit, unset limit and
  offset take their defaults). If ids, property ids or assessment numbers
  are supplied the store is searched on those directly; otherwise the
  matching assessment numbers are resolved first and, if none resolve,
  the search short-circuits with an empty result.
"""

from __future__ import annotations

from src.application.ports.assessment_store import AssessmentStoreProtocol
from src.application.ports.user_directory import UserDirectoryProtocol
from src.application.services.base import LoggingMixin
from src.config.assessment_config import AssessmentConfig
from src.domain.models.assessment import Assessment
from src.domain.models.request_info import RequestInfo
from src.domain.models.search_criteria import AssessmentSearchCriteria


def normalize_pagination(
    criteria: AssessmentSearchCriteria, config: AssessmentConfig
) -> AssessmentSearchCriteria:
    """Apply limit/offset bounds and defaults in place.

    Returns:
        The same criteria object, for chaining.
    """
    if criteria.limit is not None and criteria.limit > config.max_search_limit:
        criteria.limit = config.max_search_limit
    if criteria.limit is None:
        criteria.limit = config.default_limit
    if criteria.offset is None:
        criteria.offset = config.default_offset
    return criteria


class AssessmentSearchService(LoggingMixin):
    """Searches stored assessments."""

    def __init__(
        self,
        store: AssessmentStoreProtocol,
        user_directory: UserDirectoryProtocol,
        config: AssessmentConfig,
    ) -> None:
        self._store = store
        self._users = user_directory
        self._config = config
        self._init_logger()

    async def search_assessments(
        self,
        criteria: AssessmentSearchCriteria,
        request_info: RequestInfo,
    ) -> list[Assessment]:
        """Search the store and fill owner details from the user directory."""
        assessments = await self._store.search(criteria)
        if not assessments:
            return []

        owner_ids = {
            owner.uuid
            for assessment in assessments
            for owner in assessment.owners
            if owner.uuid is not None
        }
        if owner_ids:
            users = await self._users.get_users(criteria.tenant_id, owner_ids, request_info)
            for assessment in assessments:
                assessment.owners = [
                    users.get(owner.uuid, owner) if owner.uuid is not None else owner
                    for owner in assessment.owners
                ]

        self._log_operation("search_assessments", tenant_id=criteria.tenant_id).debug(
            "assessments_found", count=len(assessments), owners=len(owner_ids)
        )
        return assessments

    async def plain_search(self, criteria: AssessmentSearchCriteria) -> list[Assessment]:
        """Paginated search with direct-filter precedence."""
        normalize_pagination(criteria, self._config)
        log = self._log_operation(
            "plain_search", limit=criteria.limit, offset=criteria.offset
        )

        scoped = AssessmentSearchCriteria(tenant_id=criteria.tenant_id, limit=criteria.limit)
        if criteria.has_direct_filters():
            scoped.ids = criteria.ids
            scoped.property_ids = criteria.property_ids
            scoped.assessment_numbers = criteria.assessment_numbers
            scoped.offset = criteria.offset
        else:
            # The number lookup already applied the offset
            numbers = await self._store.fetch_assessment_numbers(criteria)
            if not numbers:
                log.debug("plain_search_no_numbers_resolved")
                return []
            scoped.assessment_numbers = set(numbers)
            scoped.offset = 0

        results = await self._store.search(scoped)
        log.debug("plain_search_completed", count=len(results))
        return results
