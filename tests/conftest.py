import random

import pytest


class ScriptedRandom(random.Random):
    """random() returns scripted draws (then 0.99); choice() always picks index *pick*."""

    def __init__(self, draws=(), pick=0):
        super().__init__(0)
        self.draws = list(draws)
        self.pick = pick

    def random(self):
        return self.draws.pop(0) if self.draws else 0.99

    def choice(self, seq):
        return seq[self.pick % len(seq)]


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def clock():
    return FakeClock()
