"""Git-backed fetch executor.

``materialize`` runs, in order:

- ``git clone <url> <name>`` in the workspace. A clone into an existing,
  non-empty directory is tolerated so reruns reuse earlier checkouts.
- ``git checkout <revision>`` in the checkout.
- ``git pull`` in the checkout (can be disabled for tag/commit pins).

Every other non-zero exit raises :class:`FetchError` carrying the command's
combined output.
"""
from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Tuple

from depfetch.core.exceptions import FetchError
from depfetch.core.utils.subprocess import run_with_timeout

from .workspace import dependency_dir

logger = logging.getLogger(__name__)

ALREADY_EXISTS_MARKER = "already exists and is not an empty directory"

# Git output is matched against ALREADY_EXISTS_MARKER, so messages must stay untranslated.
GIT_LOCALE_ENV = {"LC_ALL": "C", "LANGUAGE": "C"}


class GitFetcher:
    def __init__(
        self,
        workspace: Path,
        *,
        git_binary: str = "git",
        timeout: Optional[float] = None,
        pull: bool = True,
        verify_existing_remote: bool = False,
        run_func: Callable[..., subprocess.CompletedProcess] = run_with_timeout,
    ) -> None:
        self.workspace = Path(workspace)
        self.git_binary = git_binary
        self.timeout = timeout
        self.pull = pull
        self.verify_existing_remote = verify_existing_remote
        self.run_func = run_func

    @classmethod
    def from_config(cls, workspace: Path, fetch_config: Any, **kwargs: Any) -> "GitFetcher":
        """Build a fetcher from a :class:`FetchConfig`."""
        return cls(
            workspace,
            git_binary=fetch_config.git_binary,
            timeout=fetch_config.timeout_seconds,
            pull=fetch_config.pull,
            verify_existing_remote=fetch_config.verify_existing_remote,
            **kwargs,
        )

    def _git(self, args: Sequence[str], *, cwd: Path, operation: str) -> Tuple[int, str]:
        argv = [self.git_binary, *args]
        command = "git " + " ".join(args)
        try:
            result = self.run_func(
                argv,
                cwd=str(cwd),
                env={**os.environ, **GIT_LOCALE_ENV},
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            output = _decode(exc.output) + _decode(exc.stderr)
            raise FetchError(
                f"'{command}' timed out after {self.timeout}s",
                operation=operation,
                output=output,
            ) from exc
        except OSError as exc:
            raise FetchError(f"cannot run '{command}' in {cwd}: {exc}", operation=operation) from exc

        output = _decode(result.stdout) + _decode(result.stderr)
        if output.strip():
            logger.info("process '%s' output: %s", command, output.rstrip())
        return result.returncode, output

    def _require_success(self, args: Sequence[str], *, cwd: Path, operation: str) -> str:
        returncode, output = self._git(args, cwd=cwd, operation=operation)
        if returncode != 0:
            raise FetchError(
                f"'git {' '.join(args)}' failed in {cwd} (exit {returncode}):\n{output.rstrip()}",
                operation=operation,
                output=output,
                returncode=returncode,
            )
        return output

    def _check_remote(self, target: Path, url: str) -> None:
        current = self._require_success(["remote", "get-url", "origin"], cwd=target, operation="verify").strip()
        if current != url:
            raise FetchError(
                f"{target} already exists but tracks {current}, expected {url}",
                operation="clone",
                output=current,
            )

    def clone(self, name: str, url: str) -> Path:
        target = dependency_dir(self.workspace, name)
        returncode, output = self._git(["clone", url, name], cwd=self.workspace, operation="clone")
        if returncode != 0:
            if ALREADY_EXISTS_MARKER not in output:
                raise FetchError(
                    f"'git clone {url} {name}' failed (exit {returncode}):\n{output.rstrip()}",
                    operation="clone",
                    output=output,
                    returncode=returncode,
                )
            logger.info("%s already cloned, reusing it", target)
            if self.verify_existing_remote:
                self._check_remote(target, url)
        return target

    def materialize(self, name: str, url: str, revision: str) -> Path:
        target = self.clone(name, url)
        self._require_success(["checkout", revision], cwd=target, operation="checkout")
        if self.pull:
            self._require_success(["pull"], cwd=target, operation="pull")
        return target


def _decode(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


__all__ = ["GitFetcher", "ALREADY_EXISTS_MARKER", "GIT_LOCALE_ENV"]
