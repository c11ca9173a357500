from __future__ import annotations

import httpx

from xtop.config import TargetConfig
from xtop.metrics import ErrorType, Result


def build_client(target: TargetConfig) -> httpx.AsyncClient:
    # pool size tracks the worker count
    return httpx.AsyncClient(
        limits=httpx.Limits(
            max_connections=target.concurrency,
            max_keepalive_connections=target.concurrency,
        ),
    )


def header_value(resp: httpx.Response, name: str) -> str:
    values = resp.headers.get_list(name)
    return values[0] if values else ""


def status_line(resp: httpx.Response) -> str:
    reason = resp.reason_phrase
    if reason:
        return f"{resp.status_code} {reason}"
    return str(resp.status_code)


async def send_request(client: httpx.AsyncClient, target: TargetConfig) -> Result:
    """Issue one GET against the target and describe what came back.

    The body is streamed and released unread; transport errors become a
    failed Result instead of propagating.
    """
    try:
        async with client.stream("GET", target.url) as resp:
            return Result.ok(status_line(resp), header_value(resp, target.header))
    except httpx.TimeoutException:
        err = ErrorType.TIMEOUT
    except httpx.ConnectError:
        err = ErrorType.CONNECT
    except httpx.ReadError:
        err = ErrorType.READ
    except httpx.HTTPError:
        err = ErrorType.OTHER
    return Result.failed(err)
