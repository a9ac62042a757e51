"""Subprocess helpers with timeouts.

This module provides safe subprocess execution with:
- Optional per-call timeout that also terminates the child's process group
- Debug logging of every command and its exit status
- No shell=True (argv lists only)
"""
from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess
from time import perf_counter
from typing import Any, Optional, Sequence

logger = logging.getLogger(__name__)


def _flatten_cmd(cmd: Any) -> Sequence[str]:
    if isinstance(cmd, (list, tuple)):
        return [str(p) for p in cmd]
    return shlex.split(str(cmd))


def _popen_process_group_kwargs() -> dict[str, Any]:
    if os.name == "posix":
        return {"start_new_session": True}
    if os.name == "nt":
        creationflags = getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", None)
        if isinstance(creationflags, int):
            return {"creationflags": creationflags}
    return {}


def _terminate_process_group(proc: subprocess.Popen[Any]) -> None:
    if proc.poll() is not None:
        return
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGTERM)
        except OSError:
            proc.terminate()
        try:
            proc.wait(timeout=0.2)
        except subprocess.TimeoutExpired:
            pass
        if proc.poll() is None:
            try:
                os.killpg(proc.pid, signal.SIGKILL)
            except OSError:
                proc.kill()
        try:
            proc.wait(timeout=0.2)
        except subprocess.TimeoutExpired:
            pass
        return

    proc.kill()
    try:
        proc.wait(timeout=0.2)
    except subprocess.TimeoutExpired:
        pass


def _run_capture_output_nohang(cmd: Any, *, timeout: float, **kwargs: Any) -> subprocess.CompletedProcess:
    argv = list(_flatten_cmd(cmd))
    input_value = kwargs.pop("input", None)
    cwd = kwargs.pop("cwd", None)
    env = kwargs.pop("env", None)
    text = bool(kwargs.pop("text", True))
    check = bool(kwargs.pop("check", False))
    kwargs.pop("capture_output", None)

    proc = subprocess.Popen(
        argv,
        cwd=cwd,
        env=env,
        stdin=subprocess.PIPE if input_value is not None else subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=text,
        **_popen_process_group_kwargs(),
    )
    try:
        stdout, stderr = proc.communicate(input=input_value, timeout=timeout)
    except subprocess.TimeoutExpired as exc:
        _terminate_process_group(proc)
        try:
            stdout, stderr = proc.communicate(timeout=0.2)
        except subprocess.TimeoutExpired:
            stdout = getattr(exc, "output", None)
            stderr = getattr(exc, "stderr", None)
        raise subprocess.TimeoutExpired(argv, timeout, output=stdout, stderr=stderr) from None

    completed = subprocess.CompletedProcess(
        argv,
        proc.returncode if proc.returncode is not None else 0,
        stdout=stdout,
        stderr=stderr,
    )
    if check and completed.returncode != 0:
        raise subprocess.CalledProcessError(
            completed.returncode,
            argv,
            output=stdout,
            stderr=stderr,
        )
    return completed


def run_with_timeout(cmd: Any, timeout: Optional[float] = None, **kwargs: Any) -> subprocess.CompletedProcess:
    """Run a subprocess, optionally bounded by ``timeout`` seconds.

    Args:
        cmd: Command list/str passed through to ``subprocess.run``.
        timeout: Seconds before the command (and its process group) is killed.
            ``None`` waits indefinitely.
        **kwargs: Additional arguments forwarded to ``subprocess.run``.

    Returns:
        CompletedProcess from ``subprocess.run``.

    Raises:
        subprocess.TimeoutExpired: When the command exceeds ``timeout``.
        FileNotFoundError: When the executable cannot be found.
    """
    argv = _flatten_cmd(cmd)
    logger.debug("run %s (cwd=%s, timeout=%s)", " ".join(argv), kwargs.get("cwd"), timeout)
    start = perf_counter()

    capture_output = bool(kwargs.get("capture_output", False))
    if capture_output and timeout is not None and "stdout" not in kwargs and "stderr" not in kwargs:
        result = _run_capture_output_nohang(cmd, timeout=float(timeout), **kwargs)
    else:
        result = subprocess.run(cmd, timeout=timeout, **kwargs)

    logger.debug(
        "exit %s from %s in %.1fms",
        result.returncode,
        argv[0] if argv else "<empty>",
        (perf_counter() - start) * 1000.0,
    )
    return result


__all__ = ["run_with_timeout"]
