"""
Privilege Boundary
==================
Scoped elevation of filesystem permission around dictionary probing/loading.

The process entry point obtains a Capability with grant(). Restricted callers
(embedded script engines) run inside sandboxed() and cannot obtain one, so they
cannot trigger dictionary I/O unless code holding a capability elevates on
their behalf with run_privileged().

State is context-local (contextvars): a scope entered on one call stack never
leaks to another thread or task.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Iterator, Optional, TypeVar

from .config_logging import PrivilegeError

T = TypeVar('T')

_sandboxed: ContextVar[bool] = ContextVar('hebrew_analysis_sandboxed', default=False)
_elevated: ContextVar[bool] = ContextVar('hebrew_analysis_elevated', default=False)

_ISSUER = object()


class Capability:
    """Token proving its holder may elevate filesystem privilege."""

    __slots__ = ('_issuer', 'holder')

    def __init__(self, issuer: object, holder: str = "plugin"):
        if issuer is not _ISSUER:
            raise PrivilegeError("Capabilities can only be issued by grant()")
        self._issuer = issuer
        self.holder = holder

    @property
    def is_valid(self) -> bool:
        return self._issuer is _ISSUER

    def __repr__(self) -> str:
        return f"Capability(holder={self.holder!r})"


def is_sandboxed() -> bool:
    """True when the current context is marked restricted."""
    return _sandboxed.get()


def is_elevated() -> bool:
    """True inside a run_privileged() scope."""
    return _elevated.get()


def grant(holder: str = "plugin") -> Capability:
    """
    Issue a capability to the caller.

    Unprivileged code such as scripts does not get one.
    """
    if is_sandboxed() and not is_elevated():
        raise PrivilegeError("Sandboxed code cannot obtain filesystem privilege",
                             holder=holder)
    return Capability(_ISSUER, holder)


@contextmanager
def sandboxed() -> Iterator[None]:
    """Mark the enclosed code as restricted."""
    sandbox_token = _sandboxed.set(True)
    elevated_token = _elevated.set(False)
    try:
        yield
    finally:
        _elevated.reset(elevated_token)
        _sandboxed.reset(sandbox_token)


@contextmanager
def privileged(capability: Capability) -> Iterator[None]:
    """Elevate filesystem permission for the enclosed block."""
    if not isinstance(capability, Capability) or not capability.is_valid:
        raise PrivilegeError("A valid capability is required to elevate privilege")
    token = _elevated.set(True)
    try:
        yield
    finally:
        _elevated.reset(token)


def run_privileged(action: Callable[[], T], capability: Optional[Capability] = None) -> T:
    """
    Run action() with elevated filesystem permission.

    Errors raised by the action propagate unchanged; the previous ambient
    permission is restored on every exit path.

    Args:
        action: Zero-argument callable
        capability: Token from grant(); one is requested when omitted

    Returns:
        Whatever action() returns
    """
    if capability is None:
        capability = grant()
    with privileged(capability):
        return action()


def require_filesystem_access(path: Optional[str] = None):
    """Raise PrivilegeError unless filesystem access is currently permitted."""
    if is_sandboxed() and not is_elevated():
        raise PrivilegeError("Filesystem access requires elevated privilege", path=path)
