from types import SimpleNamespace

import pytest


class StubCompletions:
    """Stands in for `OpenAI().chat.completions`."""

    def __init__(self, reply: str = "", error: Exception = None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class StubClient:
    """Stands in for `OpenAI()`, including its context-manager protocol."""

    def __init__(self, completions: StubCompletions):
        self.chat = SimpleNamespace(completions=completions)
        completions.client = self
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def close(self):
        self.closed = True


def make_stub_client(reply: str = "", error: Exception = None):
    completions = StubCompletions(reply, error)
    return StubClient(completions), completions


@pytest.fixture
def stub_client():
    return make_stub_client
