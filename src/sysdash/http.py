from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

JsonDict = dict[str, Any]

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(slots=True)
class ApiResponse:
    status_code: int
    body: Any
    headers: dict[str, str] = field(default_factory=dict)

    def render(self) -> bytes:
        """Encode the body; bytes and str bodies are passed through as-is."""
        if isinstance(self.body, bytes):
            return self.body
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return json.dumps(self.body, ensure_ascii=False, indent=2).encode("utf-8")

    def all_headers(self) -> dict[str, str]:
        return {"content-type": JSON_CONTENT_TYPE, **self.headers}


def json_error(status_code: int, code: str, message: str) -> ApiResponse:
    payload: JsonDict = {"error": {"code": code, "message": message}}
    return ApiResponse(status_code=status_code, body=payload)


def json_ok(payload: Any) -> ApiResponse:
    return ApiResponse(status_code=200, body=payload, headers={"cache-control": "no-store"})


def raw_ok(data: bytes) -> ApiResponse:
    return ApiResponse(status_code=200, body=data, headers={"cache-control": "no-store"})


def text_ok(text: str) -> ApiResponse:
    return ApiResponse(
        status_code=200,
        body=text,
        headers={"content-type": "text/plain; charset=utf-8", "cache-control": "no-store"},
    )
