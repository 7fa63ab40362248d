"""Development-mode fixtures and the mock responder."""

from laro_client.mock.fixtures import default_registry
from laro_client.mock.registry import FixtureRegistry, FixtureSpec, MockResponder

__all__ = ["FixtureRegistry", "FixtureSpec", "MockResponder", "default_registry"]
