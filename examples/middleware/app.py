"""Middleware — concurrent pre-handler functions.

Demonstrates:
- Global middleware (session lookup from a header)
- Exact-path middleware (per-IP rate limiter on ``/login``)
- Results reaching the handler as extra positional arguments
- threading.Lock for thread-safe shared state (free-threading)

Run:
    cd examples/middleware && python app.py
"""

import asyncio
import threading
import time

from waypoint import App, MiddlewareRejected, Request, error, json

app = App()

SESSIONS = {"token-ada": "ada", "token-bob": "bob"}


# ---------------------------------------------------------------------------
# Global middleware — session
# ---------------------------------------------------------------------------


async def session(request: Request) -> str | None:
    """Resolve the ``Authorization`` header to a user name."""
    await asyncio.sleep(0)  # stands in for a session-store round trip
    token = request.headers.get("authorization", "")
    return SESSIONS.get(token.removeprefix("Bearer "))


# ---------------------------------------------------------------------------
# Path middleware — rate limiter
# ---------------------------------------------------------------------------


class RateLimiter:
    """Per-IP rate limiter. Rejects with 429 when the limit is exceeded."""

    def __init__(self, max_requests: int, window: float) -> None:
        self.max_requests = max_requests
        self.window = window
        self._counts: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def __call__(self, request: Request) -> int:
        # Use X-Forwarded-For if behind a proxy; else a simple client identifier
        client_ip = request.headers.get("x-forwarded-for", "127.0.0.1")
        if "," in client_ip:
            client_ip = client_ip.split(",")[0].strip()

        with self._lock:
            now = time.monotonic()
            hits = self._counts.setdefault(client_ip, [])
            hits[:] = [t for t in hits if now - t < self.window]

            if len(hits) >= self.max_requests:
                raise MiddlewareRejected("Too Many Requests", status=429)
            hits.append(now)
            return self.max_requests - len(hits)


app.use(session)
app.use("/login", RateLimiter(max_requests=3, window=60.0))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/")
def index(query, user):
    return f"Hello, {user or 'stranger'}!"


@app.post("/login")
def login(query, user, remaining):
    if user is None:
        return error("invalid token", 401)
    return json({"user": user, "remaining": remaining})


if __name__ == "__main__":
    app.run()
