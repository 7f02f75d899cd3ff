# cube_engine/io_utils.py
# File helpers shared by the database and the driver (Windows-safe replace).
from __future__ import annotations
import hashlib
import json
import os
import time


def ensure_dir(p: str):
    if p and not os.path.isdir(p):
        os.makedirs(p, exist_ok=True)


def load_json(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def sha1_file(path: str) -> str:
    h = hashlib.sha1()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def _atomic_replace(src, dst, retries=12, delay=0.1):
    """
    Windows-safe replace with retries. Returns True on success, False on final failure.
    Retries PermissionError/OSError (file temporarily locked by another process).
    """
    for _ in range(retries):
        try:
            os.replace(src, dst)
            return True
        except (PermissionError, OSError):
            time.sleep(delay)
    return False


def _discard(tmp: str):
    try:
        os.remove(tmp)
    except OSError:
        pass


def atomic_write_bytes(path: str, data) -> None:
    """Write via `<path>.tmp` + replace; raises OSError if the replace never succeeds."""
    ensure_dir(os.path.dirname(path))
    tmp = path + ".tmp"
    try:
        with open(tmp, "wb") as f:
            f.write(data)
    except OSError:
        _discard(tmp)
        raise
    if not _atomic_replace(tmp, path):
        _discard(tmp)
        raise OSError(f"could not replace {path}")


def atomic_write_text(path: str, text: str) -> None:
    atomic_write_bytes(path, text.encode("utf-8"))


def atomic_write_json(path: str, payload) -> None:
    atomic_write_text(path, json.dumps(payload, ensure_ascii=False, indent=2))
