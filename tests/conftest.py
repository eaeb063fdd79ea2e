import random

import pytest

from rollscript import tree
from rollscript import vm


class fake_terminal:
    def __init__(self, lines=()):
        self.output = []
        self.lines = list(lines)
        self.prompts = []
        self.waits = 0

    def write(self, text):
        self.output.append(text)

    def wait_key(self):
        self.waits += 1

    def read_line(self, prompt=None):
        self.prompts.append(prompt)
        return self.lines.pop(0) if self.lines else None


@pytest.fixture
def term():
    return fake_terminal()


@pytest.fixture
def run(term):
    def _run(raw, seed=0, wait=True):
        program = tree.build(raw)
        return vm.run(program, term, random.Random(seed), wait)
    return _run
