# 📄 File: plantscope/modules/plant_lookup/domain/services/fallback_orchestrator.py
# 🧭 Purpose (Layman Explanation):
# Asks the data sources one after another for each kind of fact, stops as soon as an answer is good
# enough, and never lets a broken source spoil the whole result
# 🧪 Purpose (Technical Summary):
# Fallback Chain Orchestrator: interprets declarative Fallback Plans in declared order, applies a
# per-call deadline, downgrades provider and extraction failures to manifest entries, merges
# fragments first-writer-wins and memoises descriptor outcomes for the duration of one aggregation
# 🔗 Dependencies:
# asyncio, time, domain models, structured extractor, record normalizer, shared exceptions, logging
# 🔄 Connected Modules / Calls From:
# application query handlers (plant lookup, plant identification, disease lookup, weather)

"""
Fallback Chain Orchestrator

For each plan (field group), descriptors run sequentially in declared
order; they are never raced. A descriptor's outcome is one of:

- success: fragment passed the sufficiency predicate; the group is
  satisfied and the remaining descriptors are recorded as skipped
- insufficient: fragment merged as partial credit; chain continues
- failed: provider/extraction failure recorded; chain continues
- reused: same descriptor key already ran earlier in this aggregation

Only an invalid Subject Query or an entirely empty record after a
mandatory group came back empty is raised to the caller.
"""

import asyncio
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from plantscope.shared.core.exceptions import (
    ExtractionError,
    InsufficientDataError,
    InvalidInputError,
    ProviderError,
    ProviderTimeoutError,
)
from plantscope.shared.utils.logging import get_logger

from ..models.plan import (
    AggregationManifest,
    AggregationResult,
    AttemptStatus,
    FallbackPlan,
    ProviderAttempt,
    ProviderCall,
)
from ..models.record import CanonicalRecord, is_empty
from ..models.subject import SubjectQuery
from .record_normalizer import normalize, restrict_to_fields
from .structured_extractor import extract_structured_block

logger = get_logger(__name__)

# memoised outcome: (normalized fragment or None, exception or None)
Outcome = Tuple[Optional[Dict[str, Any]], Optional[Exception]]


class FallbackOrchestrator:
    """
    Interprets Fallback Plans against one Subject Query.

    One instance can serve many requests; all per-aggregation state lives
    inside run().
    """

    def __init__(
        self,
        default_timeout: float = 15.0,
        placeholders: Iterable[str] = (),
        extractor: Callable[[Any], Dict[str, Any]] = extract_structured_block
    ):
        self.default_timeout = default_timeout
        self.placeholders = list(placeholders)
        self.extractor = extractor

    async def run(
        self,
        plans: List[FallbackPlan],
        query: SubjectQuery,
        record: Optional[CanonicalRecord] = None
    ) -> AggregationResult:
        if query is None or query.is_empty:
            raise InvalidInputError(message="Subject query is empty", field="name")

        record = record if record is not None else CanonicalRecord()
        manifest = AggregationManifest()
        outcomes: Dict[str, Outcome] = {}

        for plan in plans:
            await self._run_plan(plan, query, record, manifest, outcomes)

        mandatory_missing = [
            plan.group for plan in plans
            if plan.mandatory and plan.group in manifest.missing_groups
        ]
        if mandatory_missing and record.is_empty():
            logger.warning(
                "Aggregation produced an empty record",
                extra={"subject": query.name, "missing_groups": mandatory_missing}
            )
            raise InsufficientDataError(
                subject=query.name,
                missing_groups=mandatory_missing,
                details={"attempts": [a.model_dump(mode="json") for a in manifest.attempts]}
            )

        return AggregationResult(record=record, manifest=manifest)

    async def _run_plan(
        self,
        plan: FallbackPlan,
        query: SubjectQuery,
        record: CanonicalRecord,
        manifest: AggregationManifest,
        outcomes: Dict[str, Outcome]
    ):
        satisfied = False
        contributed_any = False

        for call in plan.calls:
            if satisfied:
                self._record(manifest, plan.group, call.provider, AttemptStatus.SKIPPED)
                continue

            reused = call.key in outcomes
            started = time.monotonic()
            if reused:
                fragment, error = outcomes[call.key]
            else:
                fragment, error = await self._invoke(call, query, record)
                outcomes[call.key] = (fragment, error)
            duration_ms = 0.0 if reused else (time.monotonic() - started) * 1000

            if error is not None:
                self._record(
                    manifest, plan.group, call.provider,
                    AttemptStatus.REUSED if reused else AttemptStatus.FAILED,
                    error=error, duration_ms=duration_ms
                )
                # reported once, under the group that made the call
                if not reused:
                    manifest.warnings.append(
                        f"{plan.group}: {call.provider} failed ({_error_code(error)})"
                    )
                continue

            group_fragment = restrict_to_fields(fragment or {}, plan.fields)
            contributed = record.merge(group_fragment)
            contributed_any = contributed_any or bool(contributed)
            sufficient = not is_empty(group_fragment) and _is_sufficient(call, group_fragment)

            if reused:
                status = AttemptStatus.REUSED
            elif sufficient:
                status = AttemptStatus.SUCCESS
            else:
                status = AttemptStatus.INSUFFICIENT

            self._record(
                manifest, plan.group, call.provider, status,
                fields=contributed, duration_ms=duration_ms
            )
            if sufficient:
                satisfied = True

        if satisfied:
            manifest.satisfied_groups.append(plan.group)
        elif contributed_any or _group_has_data(record, plan.fields):
            manifest.degraded_groups.append(plan.group)
        else:
            manifest.missing_groups.append(plan.group)
            if plan.mandatory:
                manifest.warnings.append(f"{plan.group}: no provider returned usable data")

    async def _invoke(self, call: ProviderCall, query: SubjectQuery, record: CanonicalRecord) -> Outcome:
        timeout = call.timeout or self.default_timeout
        try:
            raw = await asyncio.wait_for(call.fetch(query, record), timeout=timeout)
            if call.structured:
                raw = self.extractor(raw)
            return normalize(raw, call.mapping, self.placeholders), None
        except asyncio.TimeoutError:
            return None, ProviderTimeoutError(provider=call.provider, timeout_seconds=timeout)
        except (ProviderError, ExtractionError) as e:
            return None, e
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                f"Unexpected error from provider {call.provider}: {e}",
                extra={"provider": call.provider, "descriptor": call.key},
                exc_info=True
            )
            return None, e

    def _record(
        self,
        manifest: AggregationManifest,
        group: str,
        provider: str,
        status: AttemptStatus,
        fields: Optional[List[str]] = None,
        error: Optional[Exception] = None,
        duration_ms: float = 0.0
    ):
        attempt = ProviderAttempt(
            group=group,
            provider=provider,
            status=status,
            fields=fields or [],
            error_code=_error_code(error) if error is not None else None,
            error_message=str(error) if error is not None else None,
            duration_ms=round(duration_ms, 2)
        )
        manifest.attempts.append(attempt)
        logger.log_fallback_decision(
            group, provider, status.value, fields=fields,
            extra={"error_code": attempt.error_code} if error is not None else None
        )


def _error_code(error: Exception) -> str:
    return getattr(error, "error_code", None) or "UNEXPECTED_ERROR"


def _is_sufficient(call: ProviderCall, fragment: Dict[str, Any]) -> bool:
    try:
        return bool(call.sufficient(fragment))
    except (KeyError, TypeError, ValueError, AttributeError):
        return False


def _group_has_data(record: CanonicalRecord, fields: List[str]) -> bool:
    return any(record.has(field) for field in fields)
