"""
WireMCP tshark Runner

Locates tshark and runs it as a subprocess. Arguments are always passed
as an argv list; nothing goes through a shell.
"""

import asyncio
import os
import shutil
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Sequence

import structlog

from wiremcp.config import settings
from wiremcp.errors import CaptureFileNotFoundError, TsharkError, TsharkNotFoundError

logger = structlog.get_logger(__name__)


# Install locations checked when tshark is not on PATH
COMMON_TSHARK_PATHS = (
    "/usr/bin/tshark",
    "/usr/local/bin/tshark",
    "/opt/homebrew/bin/tshark",
    "/Applications/Wireshark.app/Contents/MacOS/tshark",
    r"C:\Program Files\Wireshark\tshark.exe",
)

EXTRA_PATH_DIRS = ("/usr/bin", "/usr/local/bin", "/opt/homebrew/bin")


def subprocess_env() -> dict[str, str]:
    """Current environment with the usual tshark install dirs on PATH."""
    env = dict(os.environ)
    path = env.get("PATH", "")
    env["PATH"] = os.pathsep.join(filter(None, [path, *EXTRA_PATH_DIRS]))
    return env


def ensure_exists(path: str | Path) -> Path:
    """
    Check that a capture file exists.

    Raises:
        CaptureFileNotFoundError: If there is no file at ``path``
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise CaptureFileNotFoundError(str(path))
    return file_path


def remove_capture(path: Path) -> None:
    """Delete a temporary capture file; failures are logged only."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("temp_capture_cleanup_failed", path=str(path), error=str(e))


class TsharkRunner:
    """
    Thin async wrapper around the tshark binary.

    Each capture writes to its own temporary file, so concurrent tool
    invocations never share state on disk.
    """

    def __init__(
        self,
        tshark_path: str | None = None,
        timeout: float | None = None,
        temp_dir: Path | None = None,
    ):
        """
        Initialize the runner.

        Args:
            tshark_path: Explicit binary (auto-detected when empty)
            timeout: Per-invocation timeout in seconds
            temp_dir: Directory for temporary capture files
        """
        self.tshark_path = tshark_path or settings.tshark_path or None
        self.timeout = timeout if timeout is not None else settings.tshark_timeout
        self.temp_dir = temp_dir or settings.temp_dir

    # =========================================================================
    # Discovery
    # =========================================================================

    async def _responds(self, candidate: str) -> bool:
        try:
            process = await asyncio.create_subprocess_exec(
                candidate,
                "-v",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=subprocess_env(),
            )
            await asyncio.wait_for(process.communicate(), timeout=10)
        except (OSError, asyncio.TimeoutError):
            return False
        return process.returncode == 0

    async def find_tshark(self) -> str:
        """
        Locate a working tshark binary.

        Raises:
            TsharkNotFoundError: If neither PATH nor the usual install
                locations have one
        """
        if self.tshark_path:
            return self.tshark_path

        found = shutil.which("tshark", path=subprocess_env()["PATH"])
        if found:
            logger.debug("tshark_found", path=found, source="path")
            self.tshark_path = found
            return found

        for candidate in COMMON_TSHARK_PATHS:
            if await self._responds(candidate):
                logger.debug("tshark_found", path=candidate, source="fallback")
                self.tshark_path = candidate
                return candidate

        logger.error("tshark_not_found")
        raise TsharkNotFoundError()

    # =========================================================================
    # Execution
    # =========================================================================

    async def run(self, args: Sequence[str]) -> str:
        """
        Run tshark and return its stdout.

        Raises:
            TsharkError: On non-zero exit or timeout (stderr is passed through)
        """
        binary = await self.find_tshark()
        logger.debug("tshark_exec", args=list(args))

        process = await asyncio.create_subprocess_exec(
            binary,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=subprocess_env(),
        )
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise TsharkError(f"tshark timed out after {self.timeout:g}s") from e

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            raise TsharkError(
                message or f"tshark exited with status {process.returncode}",
                returncode=process.returncode,
            )

        return stdout.decode(errors="replace")

    def _temp_capture_path(self) -> Path:
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        return self.temp_dir / f"capture-{uuid.uuid4().hex}.pcap"

    async def capture(self, interface: str, duration: int) -> Path:
        """Capture live traffic into a new temporary file and return its path."""
        path = self._temp_capture_path()
        logger.info("capture_started", interface=interface, duration=duration)
        try:
            await self.run(["-i", interface, "-w", str(path), "-a", f"duration:{duration}"])
        except BaseException:
            remove_capture(path)
            raise
        return path

    @asynccontextmanager
    async def live_capture(self, interface: str, duration: int) -> AsyncIterator[Path]:
        """Capture, yield the file, and always remove it afterwards."""
        path = await self.capture(interface, duration)
        try:
            yield path
        finally:
            remove_capture(path)

    async def read_capture(self, path: str | Path, args: Sequence[str]) -> str:
        """Run tshark over an existing capture file."""
        return await self.run(["-r", str(path), *args])


def fields_args(fields: Sequence[str], output: str = "fields") -> list[str]:
    """``-T <output> -e f1 -e f2 ...`` argument list."""
    args = ["-T", output]
    for name in fields:
        args.extend(["-e", name])
    return args


# Singleton instance
_runner_instance: TsharkRunner | None = None


def get_tshark_runner() -> TsharkRunner:
    """Get or create the global tshark runner."""
    global _runner_instance
    if _runner_instance is None:
        _runner_instance = TsharkRunner()
    return _runner_instance
