"""
Batch/queue worker.

Each item is an independent pipeline invocation with its own pixel grid,
mask and queue, so items can run in a thread pool without locking. Storage
and queuing concerns are left to the caller.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
from typing import Iterable, List, Optional

from .errors import BackgroundRemovalError
from .pipeline import remove_background

logger = logging.getLogger(__name__)


@dataclass
class BatchItem:
    image_data: str
    tolerance: int
    feather_radius: Optional[int] = None


@dataclass
class BatchResult:
    output: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _process_item(index: int, item: BatchItem) -> BatchResult:
    logger.info("Processing batch item index=%d tolerance=%s", index, item.tolerance)
    try:
        output = remove_background(item.image_data, item.tolerance, feather_radius=item.feather_radius)
    except BackgroundRemovalError as exc:
        logger.warning("Batch item index=%d failed at %s: %s", index, exc.stage, exc)
        return BatchResult(error=str(exc))
    return BatchResult(output=output)


def process_batch(items: Iterable[BatchItem], max_workers: Optional[int] = None) -> List[BatchResult]:
    """
    Process a batch of images.

    Returns one result per item in input order. A failing item records its
    error message and does not affect the others. ``max_workers`` of None or
    1 runs the items sequentially on the calling thread.
    """
    items = list(items)
    if max_workers is None or max_workers <= 1:
        return [_process_item(index, item) for index, item in enumerate(items)]

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(_process_item, range(len(items)), items))
