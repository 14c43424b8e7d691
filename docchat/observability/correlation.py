"""
Request id context.

Holds the id of the HTTP request being served in a ContextVar so that log
records emitted from any pipeline stage can be tied back to it. Ids sent
by clients are accepted only when short and printable, since they are
echoed back in a response header.

Dependencies: contextvars, uuid
System role: Request tracing across pipeline stages
"""

import re
import uuid
from contextvars import ContextVar

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")

_CLIENT_ID_RE = re.compile(r"[A-Za-z0-9._:-]{1,64}")


def set_request_id(request_id: str | None = None) -> str:
    """
    Bind a request id to the current context.

    Args:
        request_id: Client supplied id; replaced by a fresh uuid4 hex when
            missing or not a short token

    Returns:
        str: The id now bound
    """
    if not request_id or not _CLIENT_ID_RE.fullmatch(request_id):
        request_id = uuid.uuid4().hex
    request_id_ctx.set(request_id)
    return request_id


def get_request_id() -> str:
    """Return the bound request id ("" outside a request)."""
    return request_id_ctx.get()


def clear_request_id() -> None:
    request_id_ctx.set("")
