from __future__ import annotations

from typing import Optional, Sequence


class ProvisionError(Exception):
    """Base for every error this tool raises on purpose."""


class ExecutionError(ProvisionError):
    """An external command exited non-zero or could not be spawned."""

    def __init__(
        self,
        description: str,
        argv: Sequence[str],
        returncode: Optional[int],
        stderr: str = "",
    ) -> None:
        self.description = description
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            detail = "could not be started"
        else:
            detail = f"exited with status {returncode}"
        super().__init__(f"{description}: {detail}")


class PackageError(ProvisionError):
    def __init__(self, package: str, message: str) -> None:
        self.package = package
        super().__init__(message)


class PackageNotFound(PackageError):
    def __init__(self, package: str) -> None:
        super().__init__(package, f"Package {package} not found in repositories")


class PackageInstallFailed(PackageError):
    def __init__(self, package: str, cause: ExecutionError) -> None:
        self.cause = cause
        super().__init__(package, f"Failed to install {package}: {cause}")


class ProbeTimeout(ProvisionError):
    def __init__(self, service: str, attempts: int) -> None:
        self.service = service
        self.attempts = attempts
        super().__init__(f"{service} failed to start after {attempts} attempts")


class PreconditionError(ProvisionError):
    """The environment is unsuitable; the whole run must stop."""
