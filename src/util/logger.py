import os
import sys

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}

def log(message: str, level: str = "INFO"):
    if LEVELS.get(level, LEVELS["INFO"]) < threshold():
        return
    output = f"[genet-lifecycle] [{level}] {message}"
    eprint(output)

def threshold() -> int:
    """Lowest level that is written, from LOG_LEVEL (default INFO)."""
    return LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), LEVELS["INFO"])

def eprint(*args, **kwargs):
    print(*args, file=sys.stderr, **kwargs)
