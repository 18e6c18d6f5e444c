"""
Admin Dashboard API — error taxonomy.

Route handlers raise these (or let pymongo errors propagate); the exception
handlers in ``dashboard.app`` turn them into ``{"message": ...}`` responses
with the status code carried on the class.
"""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for every error the API reports to a caller."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.__class__.__name__


class NotFoundError(DashboardError):
    """The requested document does not exist."""

    status_code = 404


class InvalidRequestError(DashboardError):
    """Malformed id or query parameter."""

    status_code = 400


class StoreUnavailableError(DashboardError):
    """The store could not be reached while serving a request."""

    status_code = 503


class QueryError(DashboardError):
    """A read failed for a reason other than connectivity."""

    status_code = 500


class StoreConnectionError(DashboardError):
    """Startup could not connect to the store. Fatal: the app never serves."""

    status_code = 503


class SeedError(DashboardError):
    """Fixture loading, validation or the reseed itself failed."""
