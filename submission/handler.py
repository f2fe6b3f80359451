import json
from typing import Any, Dict, Tuple

import log_client
from app.config import Settings
from submission.utils import log, utc_timestamp

# ==========================================
# 1. CONFIGURATION
# ==========================================

MAX_FIELD_LENGTH = 128
PAYLOAD_SOURCE = "puzzle-site"

FAILURE = {"success": False}
SUCCESS = {"success": True}
CONFIG_ERROR = {"success": False, "error": "Configuration error"}

# ==========================================
# 2. INPUT HANDLING
# ==========================================


def parse_body(raw) -> Any:
    """
    Decode a request body. Bytes/str are parsed as JSON; a JSON string that
    itself holds a serialised object is decoded a second time.
    Raises ValueError on malformed JSON and TypeError on a missing body.
    """
    if raw is None or raw == b"" or raw == "":
        raise TypeError("Request body is empty")
    body = raw
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        body = json.loads(body)
    if isinstance(body, str):
        body = json.loads(body)
    if body is None:
        raise TypeError("Request body is null")
    return body


def is_blank(value) -> bool:
    """Empty JSON values: null, false, zero and the empty string."""
    if value is None or value is False or value == "":
        return True
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0


def to_text(value) -> str:
    """Render a decoded JSON value as text; arrays are comma-joined."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join(to_text(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def normalize_field(value) -> str:
    if is_blank(value):
        return ""
    return to_text(value).strip()[:MAX_FIELD_LENGTH]


def build_payload(name: str) -> Dict[str, str]:
    return {
        "name": name,
        "timestamp": utc_timestamp(),
        "source": PAYLOAD_SOURCE,
    }


def answers_match(answer: str, secret: str) -> bool:
    return answer.lower() == secret.lower()


# ==========================================
# 3. SUBMISSION FLOW
# ==========================================


async def handle_submission(body: Any, settings: Settings) -> Tuple[int, Dict[str, Any]]:
    """
    Validate a submission and relay a notification on success.

    Returns (status_code, response_body). Wrong answers get the same
    `success: false` body as other soft failures so the endpoint cannot be
    used as an oracle. Relay failures are logged and never change the result.
    """
    fields = body if isinstance(body, dict) else {}
    name = normalize_field(fields.get("name"))
    answer = normalize_field(fields.get("answer"))

    if not name or not answer:
        return 400, dict(FAILURE)

    secret = settings.secret_word
    if not secret:
        log("ERROR: SECRET_WORD not set")
        return 500, dict(CONFIG_ERROR)

    if not answers_match(answer, secret):
        return 200, dict(FAILURE)

    payload = build_payload(name)

    if not settings.log_endpoint:
        log("ERROR: LOG_ENDPOINT not set; would have forwarded:", json.dumps(payload))
        return 200, dict(SUCCESS)

    result = await log_client.forward_notification(
        settings.log_endpoint,
        payload,
        token=settings.log_auth_token,
        timeout=settings.log_timeout,
    )
    if result.ok:
        log(f"Forwarded solve for {name!r} (status {result.status_code})")

    return 200, dict(SUCCESS)
