import asyncio
import logging
import os
import shlex
import subprocess
import tempfile
import threading
import time

from core.config import Settings, settings
from schemas.run import CompileResult, RunRequest

logger = logging.getLogger(__name__)

_run_limiter: threading.BoundedSemaphore | None = None
_run_limiter_size = 0
_run_limiter_lock = threading.Lock()


def _get_run_limiter(size: int) -> threading.BoundedSemaphore | None:
    global _run_limiter, _run_limiter_size

    if size <= 0:
        return None

    with _run_limiter_lock:
        if _run_limiter is None or _run_limiter_size != size:
            _run_limiter = threading.BoundedSemaphore(size)
            _run_limiter_size = size
        return _run_limiter


def write_source(code: str | None, config: Settings = settings) -> str:
    """
    Write submitted code to a fresh source file and return its path.
    Every call gets its own file, so concurrent runs never share input.
    The caller owns the file and must remove it.
    """
    os.makedirs(config.WORK_DIR, exist_ok=True)
    fd, path = tempfile.mkstemp(
        prefix="compii_", suffix=config.SOURCE_SUFFIX, dir=config.WORK_DIR
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="replace", newline="") as f:
            f.write(code or "")
    except Exception:
        remove_source(path)
        raise
    return path


def remove_source(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to remove source file {path}: {e}")


def run_compiler(source_path: str, config: Settings = settings) -> CompileResult:
    """
    Run the external compiler against a source file.

    Args:
        source_path: File passed to the compiler as its only argument
        config: Settings providing the compiler path and limits

    Returns:
        CompileResult with the captured streams and exit status
    """
    command = [config.COMPILER_PATH, source_path]
    timeout = config.COMPILER_TIMEOUT_SECONDS
    start_time = time.perf_counter()

    try:
        result = subprocess.run(command, capture_output=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        return CompileResult(
            error=f"Compiler timed out after {timeout:g} seconds",
            error_type="timeout",
            execution_time=timeout,
        )
    except OSError as e:
        return CompileResult(
            error=f"Failed to start compiler {config.COMPILER_PATH}: {e}",
            error_type="system",
        )

    execution_time = round(time.perf_counter() - start_time, 4)
    stdout = result.stdout.decode("utf-8", errors="replace")
    stderr = result.stderr.decode("utf-8", errors="replace")

    if result.returncode != 0:
        return CompileResult(
            stdout=stdout,
            stderr=stderr,
            exit_code=result.returncode,
            error=f"Command failed with exit code {result.returncode}: {shlex.join(command)}",
            error_type="compile",
            execution_time=execution_time,
        )

    return CompileResult(
        stdout=stdout,
        stderr=stderr,
        exit_code=result.returncode,
        execution_time=execution_time,
    )


def compile_source(code: str | None, config: Settings = settings) -> CompileResult:
    limiter = _get_run_limiter(config.MAX_CONCURRENT_RUNS)
    source_path = write_source(code, config)
    try:
        if limiter is None:
            return run_compiler(source_path, config)
        with limiter:
            return run_compiler(source_path, config)
    finally:
        remove_source(source_path)


async def execute_code(request: RunRequest, config: Settings = settings) -> CompileResult:
    try:
        result = await asyncio.to_thread(compile_source, request.code, config)
    except OSError as e:
        logger.warning(f"Could not prepare source file: {e}")
        return CompileResult(error=str(e), error_type="system")
    except Exception as e:
        logger.exception("Compiler run failed before completion")
        return CompileResult(error=str(e), error_type="system")

    if result.succeeded:
        logger.info(f"Compiler run succeeded in {result.execution_time}s")
    else:
        logger.info(f"Compiler run failed ({result.error_type}): {result.error}")
    return result


def render_output(result: CompileResult) -> str:
    """Collapse a compiler result into the single text field sent to the client."""
    if result.succeeded:
        return result.stdout
    return result.stderr or result.error or ""
