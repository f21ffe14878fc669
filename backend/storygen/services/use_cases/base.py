"""
Base use case class.

Each use case encapsulates a single business operation and is independent
of HTTP details: routes translate HTTP to request objects, call execute(),
and translate domain exceptions back to HTTP responses.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class UseCase(ABC, Generic[RequestT, ResponseT]):
    """
    Type Parameters:
        RequestT: Type of the input request object
        ResponseT: Type of the output response object
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """
        Execute the use case and return a response.

        Raises:
            Domain exceptions (e.g. InvalidSettingsError). HTTP exceptions
            are the route's responsibility.
        """
        pass
