"""
Uniform response envelope shared by services and HTTP handlers.
"""

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from taskboard.entity import PagingResult


def to_content(value: Any) -> Any:
    """Convert entities, paging results and containers into JSON-ready data."""
    if isinstance(value, PagingResult):
        return value.to_dict(to_content)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {k: to_content(v) for k, v in dataclasses.asdict(value).items()}
    if isinstance(value, dict):
        return {k: to_content(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_content(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass
class ResponseEntity:
    status_code: int
    content: Any = None
    message: str = ""
    date_time: datetime = field(default_factory=datetime.now)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def to_dict(self) -> dict:
        return {
            "StatusCode": self.status_code,
            "Content": to_content(self.content),
            "Message": self.message,
            "DateTime": self.date_time.isoformat(),
        }

    @classmethod
    def success(cls, content: Any = None, message: str = "Success!") -> "ResponseEntity":
        return cls(200, content, message)

    @classmethod
    def bad_request(cls, message: str, content: Any = None) -> "ResponseEntity":
        return cls(400, content, message)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized!") -> "ResponseEntity":
        return cls(401, None, message)

    @classmethod
    def forbidden(cls, message: str = "User is not allowed to perform this action!") -> "ResponseEntity":
        return cls(403, None, message)

    @classmethod
    def not_found(cls, message: str, content: Any = None) -> "ResponseEntity":
        return cls(404, content, message)
