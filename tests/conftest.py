import asyncio

import pytest

from shared.localization import Localizer


@pytest.fixture
def localizer():
    return Localizer()


class ControlledFetcher:
    """Fake transport whose responses are released by the test, one address at a time."""

    def __init__(self):
        self.calls = []
        self._gates = {}
        self._results = {}

    def _gate(self, address):
        return self._gates.setdefault(address, asyncio.Event())

    def resolve(self, address, data=None, error=None):
        self._results[address] = (data, error)
        self._gate(address).set()

    async def __call__(self, address):
        self.calls.append(address)
        await self._gate(address).wait()
        data, error = self._results[address]
        if error is not None:
            raise error
        return data


@pytest.fixture
def controlled_fetcher():
    return ControlledFetcher()
