"""Scriptable TransportProtocol implementation.

Responses are queued per (method, path). A queued value may be:
- a dict: returned as the decoded body
- an exception instance: raised
- an asyncio.Future (from ``defer``): awaited, so the test decides when
  and in which order responses arrive

The last queued response for a route is reused once the queue drains.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class RecordedCall:
    method: str
    path: str
    params: Dict[str, Any] = field(default_factory=dict)
    json: Optional[Dict[str, Any]] = None


class FakeTransport:
    def __init__(self) -> None:
        self.calls: List[RecordedCall] = []
        self._routes: Dict[Tuple[str, str], List[Any]] = {}

    def respond(self, method: str, path: str, response: Any) -> "FakeTransport":
        self._routes.setdefault((method.upper(), path), []).append(response)
        return self

    def defer(self, method: str, path: str) -> asyncio.Future:
        future = asyncio.get_running_loop().create_future()
        self.respond(method, path, future)
        return future

    def calls_to(self, method: str, path: str) -> List[RecordedCall]:
        return [c for c in self.calls if c.method == method.upper() and c.path == path]

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        method = method.upper()
        self.calls.append(RecordedCall(method, path, dict(params or {}), json))
        queue = self._routes.get((method, path))
        if not queue:
            raise AssertionError(f"No response scripted for {method} {path}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, asyncio.Future):
            response = await response
        if isinstance(response, BaseException):
            raise response
        return response
