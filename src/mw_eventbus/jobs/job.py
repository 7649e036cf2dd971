"""Jobs – the description of one unit of background work."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

#: Parameters that identify the root job rather than the work itself.
ROOT_JOB_PARAMS = frozenset({"rootJobSignature", "rootJobTimestamp"})

_NOT_DEDUPLICATED = ROOT_JOB_PARAMS | {"requestId"}


@dataclasses.dataclass(frozen=True)
class JobSpecification:
    """A job to hand over to the job queue.

    ``title`` is the prefixed DB key of the page the job concerns (e.g.
    ``Talk:Main_Page``); ``release_timestamp`` delays execution.
    """

    type: str
    params: dict[str, Any] = dataclasses.field(default_factory=dict)
    namespace: int = 0
    title: str = ""
    release_timestamp: datetime | str | int | None = None
    ignore_duplicates: bool = False
    request_id: str | None = None

    def deduplication_info(self) -> dict[str, Any]:
        """Fields that make two jobs the same piece of work."""
        return {
            "type": self.type,
            "namespace": self.namespace,
            "title": self.title,
            "params": {k: v for k, v in self.params.items() if k not in _NOT_DEDUPLICATED},
        }


__all__ = ["ROOT_JOB_PARAMS", "JobSpecification"]
