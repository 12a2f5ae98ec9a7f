"""Observed interactions recorded during test runs."""
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

import requests

from ..typespec.type_names import qualified_name

logger = logging.getLogger(__name__)


@dataclass
class Interaction:
    """A request/response pair handled by one handler action"""

    method: str
    path: str
    status: int
    route: Optional[str] = None  # route template, e.g. /users/{id}
    handler: Any = None
    action: Optional[str] = None
    view: Any = None
    request_headers: List[Tuple[str, str]] = field(default_factory=list)
    params: Dict[str, Any] = field(default_factory=dict)
    response_headers: List[Tuple[str, str]] = field(default_factory=list)
    response_body: str = ""
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.method = self.method.upper()
        if self.route is None:
            self.route = self.path

    @property
    def operation_id(self) -> str:
        if self.handler is not None and self.action:
            return f"{qualified_name(self.handler)}.{self.action}"
        return f"{self.method} {self.route}"

    def route_key(self) -> Tuple[str, str, str, Optional[str]]:
        """Identity of the documented route"""
        return (self.method, self.route, qualified_name(self.handler), self.action)

    @classmethod
    def from_response(
        cls,
        response: requests.Response,
        handler: Any = None,
        action: Optional[str] = None,
        view: Any = None,
        route: Optional[str] = None,
    ) -> "Interaction":
        """
        Build an interaction from a `requests` response

        Args:
            response: Response whose `request` attribute holds the sent request
            handler: Handler class that served the request
            action: Handler method name
            view: View that rendered the response body
            route: Route template (defaults to the request path)
        """
        request = response.request
        path = urlsplit(request.url or response.url or "").path or "/"

        return cls(
            method=request.method or "GET",
            path=path,
            route=route,
            status=response.status_code,
            handler=handler,
            action=action,
            view=view,
            request_headers=list(request.headers.items()),
            params=decode_body(request.body),
            response_headers=list(response.headers.items()),
            response_body=response.text,
        )


class ChannelEventKind(str, Enum):
    """Kinds of channel traffic"""
    BROADCAST = "broadcast"
    MESSAGE = "message"
    REPLY = "reply"
    JOIN = "join"
    CONNECT = "connect"


@dataclass
class ChannelEvent:
    """A message exchanged over a channel (socket) connection"""

    kind: ChannelEventKind
    topic: str = ""
    event: str = ""
    payload: Dict[str, Any] = field(default_factory=dict)
    status: str = ""
    endpoint: str = ""
    options: Dict[str, Any] = field(default_factory=dict)

    @property
    def operation_id(self) -> str:
        if self.kind == ChannelEventKind.REPLY:
            return f"{self.topic}.reply"
        if self.kind == ChannelEventKind.JOIN:
            return f"{self.endpoint}.reply"
        if self.kind == ChannelEventKind.CONNECT:
            return f"{self.endpoint}.connect"
        return f"{self.topic}.{self.event}"


def decode_body(body: Any) -> Dict[str, Any]:
    """Decode a JSON or form encoded request body into a params dict"""
    if not body:
        return {}

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")

    try:
        decoded = json.loads(body)
    except (TypeError, ValueError):
        logger.debug("Request body is not JSON, decoding as form data")
        return dict(parse_qsl(str(body)))

    return decoded if isinstance(decoded, dict) else {"_json": decoded}
