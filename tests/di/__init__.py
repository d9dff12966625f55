"""Test-side DI: mock components and the test container.

Importing this package registers ``MockPersistenceProvider`` as the mock
side of the persistence component.
"""

from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = ["MockPersistenceProvider", "build_test_container"]
