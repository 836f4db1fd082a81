"""Explicit outcome of a single provider call.

Resolvers branch on ``Success`` / ``Failure`` instead of catching provider
exceptions, so the only exception that reaches them is a genuine bug or a
cancellation.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from travel_resolver.errors import ProviderNotConfigured, ProviderRequestFailed

T = TypeVar("T")

NOT_CONFIGURED = "not_configured"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    error: Union[ProviderNotConfigured, ProviderRequestFailed]

    @property
    def kind(self) -> str:
        if isinstance(self.error, ProviderNotConfigured):
            return NOT_CONFIGURED
        return self.error.kind

    @property
    def cause(self):
        return getattr(self.error, "cause", None)


ProviderResult = Union[Success[T], Failure]
