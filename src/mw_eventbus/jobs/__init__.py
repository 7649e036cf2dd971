"""Jobs – job events pushed through the event bus, and their validation."""
from mw_eventbus.jobs.events import (
    JOB_SCHEMA,
    JOB_STREAM_PREFIX,
    SIGNATURE_FIELD,
    JobEventFactory,
    job_stream,
)
from mw_eventbus.jobs.queue import EventBusJobQueue
from mw_eventbus.jobs.job import ROOT_JOB_PARAMS, JobSpecification
from mw_eventbus.jobs.validator import EventBodyValidator

__all__ = [
    "JOB_SCHEMA",
    "JOB_STREAM_PREFIX",
    "ROOT_JOB_PARAMS",
    "SIGNATURE_FIELD",
    "EventBodyValidator",
    "EventBusJobQueue",
    "JobEventFactory",
    "JobSpecification",
    "job_stream",
]
