from __future__ import annotations
import json
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx


def post_json(url: str, payload: dict, *, timeout_s: float, headers: Optional[dict] = None) -> Any:
    """POST and decode a JSON reply within a total wall-clock budget.

    httpx timeouts apply to each connect/read step separately, so a server
    trickling bytes could hold the call open indefinitely. The body is
    streamed and the attempt aborted once timeout_s has elapsed overall.
    """
    deadline = time.monotonic() + timeout_s
    body = bytearray()

    with httpx.Client(timeout=timeout_s) as client:
        with client.stream("POST", url, headers=headers, json=payload) as r:
            r.raise_for_status()
            for chunk in r.iter_bytes():
                body.extend(chunk)
                if time.monotonic() > deadline:
                    raise httpx.ReadTimeout(
                        f"response not complete after {timeout_s:.1f}s", request=r.request
                    )

    return json.loads(bytes(body))


class LLMProvider(ABC):
    @abstractmethod
    def generate(self, *, system: str, user: str) -> str:
        """
        Must return the model output as TEXT (we'll parse/validate JSON in LLMClient).
        Transport and HTTP errors propagate; LLMClient handles retries.
        """
        raise NotImplementedError
