"""
Fixture Generation Client

Deterministic test double for GenerationClient. Responses are served in
order from a queue; each entry is a string, a dict (serialised to JSON), a
callable receiving the request, or an exception instance to raise.
Every request is recorded for inspection.
"""

import json
from typing import Any, Callable, Iterable, List, Optional, Union

from storygen.core.exceptions import GenerationCallError

from .base import GenerationClient, GenerationRequest, ProviderType, ensure_json_text

FixtureResponse = Union[str, dict, BaseException, Callable[[GenerationRequest], Any]]


class FixtureGenerationClient(GenerationClient):
    """
    Queue-backed generation client.

    Usage:
        client = FixtureGenerationClient([
            {"title": "Coffee", "script": "..."},
            lambda request: scenes_for(request),
        ])
        text = await client.generate(request)
        assert client.call_count == 1
    """

    provider_type = ProviderType.FIXTURE

    def __init__(
        self,
        responses: Optional[Iterable[FixtureResponse]] = None,
        default: Optional[FixtureResponse] = None,
    ):
        """
        Args:
            responses: Responses served in order, one per call
            default: Served once the queue is exhausted; without it an
                exhausted queue raises GenerationCallError
        """
        self._responses: List[FixtureResponse] = list(responses or [])
        self.default = default
        self.requests: List[GenerationRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def queue(self, *responses: FixtureResponse) -> None:
        self._responses.extend(responses)

    def is_available(self) -> bool:
        return True

    def list_models(self) -> List[str]:
        return ["fixture"]

    def _next_response(self) -> FixtureResponse:
        if self._responses:
            return self._responses.pop(0)
        if self.default is not None:
            return self.default
        raise GenerationCallError("Fixture response queue is exhausted", provider=self.name)

    async def generate(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        entry = self._next_response()

        if isinstance(entry, BaseException):
            raise entry
        if callable(entry):
            entry = entry(request)
        if isinstance(entry, (dict, list)):
            entry = json.dumps(entry, ensure_ascii=False)

        text = str(entry)
        if request.expects_json:
            return ensure_json_text(text, provider=self.name)
        return text
