"""
Scheduling service that loads a user's constraints and runs the engine.
"""

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from ..config import CONSTRAINT_CACHE_TTL_SECONDS
from ..scheduling.algorithms.assigner import create_optimal_schedule
from ..scheduling.algorithms.slot_generator import generate_time_slots
from ..scheduling.constraints.conflict_validator import validate_schedule
from ..scheduling.core.resolver import ConstraintResolver
from .cache import InMemoryCache, KeyValueCache
from .store import ConstraintStore

logger = logging.getLogger(__name__)


class SchedulingService:
    """Runs engine calls against a cached snapshot of each user's constraints."""

    def __init__(self, cache: Optional[KeyValueCache] = None, ttl_seconds: int = CONSTRAINT_CACHE_TTL_SECONDS):
        self.cache = cache or InMemoryCache(default_ttl_seconds=ttl_seconds)

    @staticmethod
    def _cache_key(user_id: int) -> str:
        return f"constraints:{user_id}"

    async def get_resolver(self, store: ConstraintStore, user_id: int) -> ConstraintResolver:
        """Get the cached resolver for a user, loading blocks/exceptions/classes on a miss."""
        key = self._cache_key(user_id)
        resolver = self.cache.get(key)
        if resolver is not None:
            return resolver

        blocks = await store.load_time_blocks(user_id)
        exceptions = await store.load_exceptions(user_id)
        classes = await store.load_class_schedule(user_id)
        resolver = ConstraintResolver(blocks, exceptions, classes)
        self.cache.set(key, resolver)
        logger.debug(f"Loaded constraints for user {user_id}: {len(blocks)} blocks, "
                     f"{len(exceptions)} exceptions, {len(classes)} classes")
        return resolver

    def invalidate(self, user_id: int):
        """Drop the cached snapshot after any availability or class change."""
        self.cache.delete(self._cache_key(user_id))

    async def resolve_day(self, store: ConstraintStore, user_id: int, day: date) -> list:
        resolver = await self.get_resolver(store, user_id)
        return resolver.resolve_day(day)

    async def validate(self, store: ConstraintStore, user_id: int, candidates: Iterable) -> dict:
        resolver = await self.get_resolver(store, user_id)
        return validate_schedule(candidates, resolver)

    async def _tasks_and_preferences(self, store: ConstraintStore, user_id: int, tasks, preferences):
        if tasks is None:
            tasks = await store.load_tasks(user_id)
        if preferences is None:
            preferences = await store.load_preferences(user_id)
        return tasks, preferences

    async def time_slots(self, store: ConstraintStore, user_id: int, tasks=None, preferences=None,
                         availability_override=None, start_date: Optional[date] = None,
                         now: Optional[datetime] = None) -> dict:
        tasks, preferences = await self._tasks_and_preferences(store, user_id, tasks, preferences)
        resolver = await self.get_resolver(store, user_id)
        return generate_time_slots(tasks, preferences, availability_override,
                                   resolver=resolver, start_date=start_date, now=now)

    async def optimal_schedule(self, store: ConstraintStore, user_id: int, tasks=None, preferences=None,
                               constraints: Optional[dict] = None, start_date: Optional[date] = None,
                               now: Optional[datetime] = None) -> dict:
        tasks, preferences = await self._tasks_and_preferences(store, user_id, tasks, preferences)
        resolver = await self.get_resolver(store, user_id)
        return create_optimal_schedule(tasks, preferences, constraints,
                                       resolver=resolver, start_date=start_date, now=now)


# Global scheduling service instance
scheduling_service = SchedulingService()
