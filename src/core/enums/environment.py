"""Application environment types.

Used by Settings to pick environment-specific behavior (log renderer,
error verbosity).

Environments:
- DEVELOPMENT: Local development with hot reload, colored console logs
- TESTING: Automated test execution with JSON logs
- CI: Continuous integration environment
- PRODUCTION: Production deployment
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
