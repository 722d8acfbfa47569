"""Services for the checker integration."""

from .checker import CheckerService, checker_svc

__all__ = ["CheckerService", "checker_svc"]
