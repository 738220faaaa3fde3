from __future__ import annotations


def exit_status(returncode: int) -> int:
    """Shell-style exit status: signals map to 128+N, success never leaks through."""

    if returncode < 0:
        return 128 - returncode
    return returncode or 1


class InstallerError(RuntimeError):
    """Fatal installer condition; carries the process exit code."""

    exit_code: int = 1

    def __init__(self, message: str, *, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class CommandError(InstallerError):
    def __init__(self, argv: list[str], returncode: int, output: str = "") -> None:
        super().__init__(
            f"Command failed ({returncode}): {' '.join(argv)}\n{output}".rstrip(),
            exit_code=exit_status(returncode),
        )
        self.argv = argv
        self.returncode = returncode
        self.output = output


class StepFailed(InstallerError):
    def __init__(self, description: str, returncode: int) -> None:
        super().__init__(f"{description} failed (rc={returncode})", exit_code=exit_status(returncode))
        self.description = description
        self.returncode = returncode


class SetupFailed(InstallerError):
    """The product setup command failed and no remediation applies."""

    def __init__(self, returncode: int, log_path: str | None = None) -> None:
        msg = f"openvas-setup failed (rc={returncode})"
        if log_path:
            msg += f". Check log: {log_path}"
        super().__init__(msg, exit_code=exit_status(returncode))
        self.returncode = returncode


class RemediationDeclined(InstallerError):
    def __init__(self) -> None:
        super().__init__("Not applying SELinux disable. openvas-setup cannot proceed.", exit_code=1)


class InvalidTransition(InstallerError):
    pass


class BootloaderUnavailable(InstallerError):
    pass


class NotRoot(InstallerError):
    pass
