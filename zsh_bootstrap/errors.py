from __future__ import annotations


class BootstrapError(RuntimeError):
    """Fatal condition: the run stops and exits non-zero."""


class UnsupportedOSError(BootstrapError):
    pass


class PackageInstallError(BootstrapError):
    pass


class FrameworkInstallError(BootstrapError):
    pass


class BackupError(BootstrapError):
    pass


class ConfigurationError(BootstrapError):
    pass


class CommandError(BootstrapError):
    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode
