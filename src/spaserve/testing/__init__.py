"""Test utilities for spaserve applications.

    from spaserve.testing import TestClient
"""

from spaserve.testing.client import TestClient

__all__ = ["TestClient"]
