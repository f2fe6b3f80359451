# log_client.py
from typing import Optional

import httpx
from pydantic import BaseModel

from submission.utils import log


class ForwardResult(BaseModel):
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


def build_headers(token: Optional[str] = None) -> dict:
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def forward_notification(
    endpoint: str,
    payload: dict,
    token: Optional[str] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ForwardResult:
    """
    POST the notification payload to the log endpoint.
    Never raises on HTTP or network failure; the outcome is returned as a
    ForwardResult and logged so the caller's response stays unaffected.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.post(endpoint, headers=build_headers(token), json=payload)
            if not resp.is_success:
                log(f"ERROR: Forward failed {resp.status_code} {resp.text[:500]}")
                return ForwardResult(ok=False, status_code=resp.status_code, error=resp.text[:500])
            return ForwardResult(ok=True, status_code=resp.status_code)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log(f"ERROR: Error forwarding to LOG_ENDPOINT: {type(e).__name__} - {str(e)[:200]}")
        return ForwardResult(ok=False, error=f"{type(e).__name__}: {e}")
    except Exception as e:
        # e.g. header values httpx cannot encode
        log(f"ERROR: Error forwarding to LOG_ENDPOINT: {type(e).__name__} - {str(e)[:200]}")
        return ForwardResult(ok=False, error=f"{type(e).__name__}: {e}")
