# liftbook/errors.py
"""Domain errors raised below the router layer.

Routers translate these into HTTP responses; the services never import
FastAPI.
"""


class LiftbookError(Exception):
    """Base class for expected, caller-facing failures."""


class NotFoundError(LiftbookError):
    def __init__(self, what: str, ident: object = None):
        self.what = what
        self.ident = ident
        super().__init__(f"{what} not found" if ident is None else f"{what} {ident} not found")


class InvalidStateError(LiftbookError):
    """The operation does not apply to the entity in its current state."""
