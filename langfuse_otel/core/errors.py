from __future__ import annotations


class LangfuseError(Exception):
    """Base class for errors raised by the client."""


class MissingCredentialsError(LangfuseError, ValueError):
    pass


class InvalidBaseURLError(LangfuseError, ValueError):
    pass


class ExporterCreationError(LangfuseError):
    pass


class ClientClosedError(LangfuseError):
    pass
