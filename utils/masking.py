from __future__ import annotations


def dest_hint(v: str, keep: int = 4) -> str:
    # Only the trailing digits of a destination ever reach the logs.
    v = (v or "").strip()
    if not v:
        return ""
    if len(v) <= keep:
        return v
    return f"...{v[-keep:]}"
