from types import SimpleNamespace

import pytest


class FakeContext:
    '''
    Stands in for a command context, recording what gets sent
    '''

    def __init__(self, user=1, channel=10):
        self.author = SimpleNamespace(
            id=user,
            color=0,
            display_name='user{}'.format(user),
            display_avatar=SimpleNamespace(url='https://cdn.example/avatar.png'))
        self.channel = SimpleNamespace(id=channel)
        self.sent = []

    async def send(self, content=None, *, embed=None):
        self.sent.append(embed if embed is not None else content)


@pytest.fixture
def ctx():
    return FakeContext()


@pytest.fixture
def make_ctx():
    return FakeContext
