"""Shared fixtures for StreamChat tests."""
import queue
import socket

import pytest


class FakeConsole:
    """Console double: scripted input lines, received messages on a queue."""

    def __init__(self, lines=()):
        self._lines = list(lines)
        self.received = queue.Queue()
        self.infos = []
        self.errors = []

    def lines(self):
        return iter(self._lines)

    def prompt(self):
        pass

    def show(self, text):
        self.received.put(text)

    def info(self, text):
        self.infos.append(text)

    def error(self, text):
        self.errors.append(text)


@pytest.fixture
def sock_pair():
    """Connected pair of stream sockets, closed after the test."""
    a, b = socket.socketpair()
    yield a, b
    for s in (a, b):
        try:
            s.close()
        except OSError:
            pass
