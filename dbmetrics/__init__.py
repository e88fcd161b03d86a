"""SQLAlchemy query and connection pool metrics for Prometheus."""

__version__ = "0.1.0"
