"""Services for the application."""
from .gym_store import GymRepository, GymStore, JsonGymRepository, JsonGymStore
from .http_client import HTTPClient
from .merger import CandidateMerger, merge_candidates
from .query_planner import QueryPlanner, query_planner
from .rate_limiter import RateLimiter
from .scheduler import AutoUpdateScheduler
from .search_engine import MultiSourceSearchEngine
from .staleness import PreRunGate, StalenessOracle
from .timers import AsyncioTimer, Clock, ScheduledTask, Timer
from .update_applier import GymUpdatePipeline, UpdateApplier

__all__ = [
    "GymRepository",
    "GymStore",
    "JsonGymRepository",
    "JsonGymStore",
    "HTTPClient",
    "CandidateMerger",
    "merge_candidates",
    "QueryPlanner",
    "query_planner",
    "RateLimiter",
    "AutoUpdateScheduler",
    "MultiSourceSearchEngine",
    "PreRunGate",
    "StalenessOracle",
    "AsyncioTimer",
    "Clock",
    "ScheduledTask",
    "Timer",
    "GymUpdatePipeline",
    "UpdateApplier",
]
