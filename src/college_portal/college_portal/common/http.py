from __future__ import annotations

from urllib.parse import quote


def attachment_disposition(filename: str) -> str:
    """Content-Disposition value for a download whose name may hold spaces or non-ASCII text.

    Latin-1 header encoding only carries the ASCII fallback; clients that
    understand ``filename*`` get the UTF-8 name.
    """
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("?", "_").replace('"', "_").replace("\\", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"
