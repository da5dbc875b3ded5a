import asyncio
from threading import Event
from typing import Any, Dict, Optional

from fastapi import Request
from starlette.concurrency import run_in_threadpool

from app.services.metadata_service import VideoMetadataService
from app.config.logging_config import get_logger

logger = get_logger(__name__)

DISCONNECT_POLL_SECONDS = 0.5


class DownloadController:

    @staticmethod
    async def get_video_metadata(
        service: VideoMetadataService,
        url: Optional[str],
        request: Optional[Request] = None,
        cancel_on_disconnect: bool = False,
    ) -> Dict[str, Any]:
        """
        Resolve metadata for a video URL on a worker thread.

        With cancel_on_disconnect the client connection is polled while the
        resolver runs and the resolver is stopped once the client goes away.
        """
        logger.info(f"Received request to fetch video metadata: {url}")

        if not cancel_on_disconnect or request is None:
            metadata = await run_in_threadpool(service.get_metadata, url)
        else:
            metadata = await DownloadController._run_cancellable(service, url, request)

        logger.info(f"Video metadata fetched successfully for: {url}")
        return metadata.to_dict()

    @staticmethod
    async def _run_cancellable(service: VideoMetadataService, url: Optional[str], request: Request):
        cancel_event = Event()
        task = asyncio.ensure_future(run_in_threadpool(service.get_metadata, url, cancel_event))
        # Retrieve the outcome even when nobody awaits the task any more
        task.add_done_callback(_consume_result)
        try:
            while not task.done():
                if await request.is_disconnected():
                    logger.warning(f"Client disconnected, cancelling resolver for: {url}")
                    cancel_event.set()
                    break
                await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
            return await task
        finally:
            # Stop the resolver if this coroutine itself is cancelled
            cancel_event.set()


def _consume_result(task: asyncio.Future) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"Abandoned metadata request finished with: {exc!r}")
