"""Testing utilities for waypoint applications.

Usage::

    from waypoint.testing import TestClient

    async with TestClient(app) as client:
        response = await client.get("/users/42")
        assert response.status == 200
"""

from waypoint.testing.client import TestClient

__all__ = ["TestClient"]
