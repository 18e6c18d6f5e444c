"""Admin Dashboard API — analytics backend for the admin dashboard frontend."""

__version__ = "1.0.0"
