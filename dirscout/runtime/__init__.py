"""Runtime orchestration: action channel, background tasks, and the dispatch loop.

Submodules are imported lazily so model code can depend on
``runtime.cancellation`` without pulling in the loop.
"""

from __future__ import annotations


def run_app(*args, **kwargs):
    """Lazily import the session entrypoint to avoid package-import cycles."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def run_dispatch_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_dispatch_loop as _run_dispatch_loop

    return _run_dispatch_loop(*args, **kwargs)


__all__ = ["run_app", "run_dispatch_loop"]
