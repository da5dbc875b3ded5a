import logging
import subprocess
import time
from abc import ABC, abstractmethod
from threading import Event
from typing import List, Optional, Sequence, Tuple

from app.core.config import settings
from .exceptions import ResolutionFailed

logger = logging.getLogger(__name__)

# Single-item JSON dump, no playlist expansion
RESOLVER_ARGS = ["-j", "--no-playlist"]


class ResolverInterface(ABC):
    """Interface for the external metadata resolver"""

    @abstractmethod
    def resolve(self, url: str, cancel_event: Optional[Event] = None) -> bytes:
        """
        Run the resolver for a URL and return its raw standard output.

        Args:
            url: The source URL of the video
            cancel_event: When set while the resolver runs, the process is
                stopped and ResolutionFailed is raised

        Returns:
            Raw stdout bytes, expected to hold one JSON document

        Raises:
            ValueError: If the URL is empty
            ResolutionFailed: If the process cannot be launched, exits
                non-zero, times out, is cancelled or prints nothing
        """
        pass


class YtDlpResolver(ResolverInterface):
    """
    Runs yt-dlp as a child process, one process per call.

    The call blocks the calling thread for the whole runtime of the process.
    Failures are never retried here.
    """

    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        poll_interval: float = 0.1,
    ):
        """
        Args:
            command: Executable plus any leading arguments (defaults to the
                configured resolver command)
            timeout: Seconds before the process is killed; None waits forever
            poll_interval: How often a cancel event is checked
        """
        self.command: List[str] = list(command) if command else list(settings.resolver_command)
        self.timeout = timeout
        self.poll_interval = poll_interval

    def build_command(self, url: str) -> List[str]:
        # "--" ends option parsing so a URL starting with "-" is never read as an option
        return [*self.command, *RESOLVER_ARGS, "--", url]

    def resolve(self, url: str, cancel_event: Optional[Event] = None) -> bytes:
        if not url:
            raise ValueError("url must be a non-empty string")

        cmd = self.build_command(url)
        logger.info(f"Launching resolver for URL: {url}")

        try:
            proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
        except OSError as e:
            logger.error(f"Could not launch resolver {cmd[0]!r}: {e}")
            raise ResolutionFailed(f"could not launch {cmd[0]}: {e}") from e

        stdout, stderr = self._wait(proc, url, cancel_event)
        diagnostic = stderr.decode("utf-8", errors="replace").strip()

        if proc.returncode != 0:
            logger.error(f"Resolver exited with status {proc.returncode} for URL {url}: {diagnostic}")
            raise ResolutionFailed(diagnostic, proc.returncode)

        if not stdout.strip():
            logger.error(f"Resolver produced no output for URL {url}")
            raise ResolutionFailed(diagnostic or "resolver produced no output")

        logger.info(f"Resolver finished for URL {url} ({len(stdout)} bytes)")
        return stdout

    def _wait(
        self,
        proc: subprocess.Popen,
        url: str,
        cancel_event: Optional[Event],
    ) -> Tuple[bytes, bytes]:
        # communicate() keeps draining both pipes, so large JSON cannot fill
        # the pipe buffer and deadlock the child.
        deadline = None if self.timeout is None else time.monotonic() + self.timeout

        while True:
            if cancel_event is not None and cancel_event.is_set():
                logger.warning(f"Resolver cancelled for URL: {url}")
                _stop_process(proc)
                raise ResolutionFailed("resolver cancelled before completion")

            if cancel_event is not None:
                wait_for = self.poll_interval
                if deadline is not None:
                    wait_for = max(0.0, min(wait_for, deadline - time.monotonic()))
            elif deadline is not None:
                wait_for = max(0.0, deadline - time.monotonic())
            else:
                wait_for = None

            try:
                return proc.communicate(timeout=wait_for)
            except subprocess.TimeoutExpired:
                if deadline is not None and time.monotonic() >= deadline:
                    logger.error(f"Resolver timed out after {self.timeout}s for URL: {url}")
                    _stop_process(proc)
                    raise ResolutionFailed(f"resolver timed out after {self.timeout} seconds")


def _stop_process(proc: subprocess.Popen) -> None:
    """Terminate the process, escalate to kill, and reap it."""
    if proc.poll() is None:
        proc.terminate()
        try:
            proc.communicate(timeout=1.0)
            return
        except subprocess.TimeoutExpired:
            proc.kill()
    proc.communicate()
