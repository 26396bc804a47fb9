"""Dependency installation through the system package manager."""

from .service import INSTALL_ARGS, InstallerService, install_environment

__all__ = ["INSTALL_ARGS", "InstallerService", "install_environment"]
