"""Shared fixtures: an in-memory JMX server behind a fake transport."""

import pytest

from jkl.client import JmxClient
from jkl.exceptions import NotFoundError
from jkl.normalization import Composite, Scalar, Sequence
from jkl.transports.base import BaseTransport


class FakeTransport(BaseTransport):
    def __init__(self, beans):
        self.beans = beans
        self.close_calls = 0
        self.reads = []

    def version(self):
        return "fake-1.0"

    def search_names(self):
        return list(self.beans)

    def list_attribute_names(self, bean):
        if bean not in self.beans:
            raise NotFoundError(f"Invalid mbean name specified ({bean}).")
        return list(self.beans[bean])

    def read_attribute(self, bean, attribute):
        self.reads.append((bean, attribute))
        if bean not in self.beans:
            raise NotFoundError(f"Invalid mbean name specified ({bean}).")
        if attribute not in self.beans[bean]:
            raise NotFoundError(f"Invalid attribute name specified ({bean}::{attribute}).")
        return self.beans[bean][attribute]

    def close(self):
        self.close_calls += 1


@pytest.fixture
def fake_transport():
    return FakeTransport(
        {
            "app:type=Runtime": {
                "Uptime": Scalar("12345"),
                "VmName": Scalar('Java "HotSpot" VM'),
                "InputArguments": Sequence(["-Xmx1g", "-Dnames=a,b"]),
            },
            "app:type=Memory": {
                "HeapMemoryUsage": Composite({"used": "75", "max": "200", "init": "50", "committed": "100"}),
                "Verbose": Scalar("false"),
                "ObjectName": Scalar("app:type=Memory"),
            },
            "app:type=Pool,name=Old Gen": {
                "Sizes": Sequence(["10", "20", "30"]),
                "Name": Scalar("Old Gen"),
            },
        }
    )


@pytest.fixture
def client(fake_transport):
    with JmxClient("localhost", 9999, transport=fake_transport) as jmx_client:
        yield jmx_client


@pytest.fixture
def patched_client(mocker, fake_transport):
    """Make every JmxClient built by the package use the fake transport."""

    def build(host, port, *, config=None):
        return JmxClient(host, port, transport=fake_transport, config=config)

    mocker.patch("jkl.core.JmxClient", side_effect=build)
    return mocker.patch("jkl.cli.JmxClient", side_effect=build)
