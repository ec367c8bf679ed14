"""Tests for the JMX client."""

import pytest

from jkl.client import JmxClient
from jkl.exceptions import JmxConnectionError, NotFoundError
from jkl.normalization import Composite


def test_client_keeps_location(client):
    assert client.host == "localhost"
    assert client.port == 9999
    assert str(client) == "localhost:9999"


def test_list_beans_is_sorted(client):
    assert client.list_beans() == [
        "app:type=Memory",
        "app:type=Pool,name=Old Gen",
        "app:type=Runtime",
    ]


def test_list_attribute_names_keeps_server_order(client):
    assert client.list_attribute_names("app:type=Memory") == ["HeapMemoryUsage", "Verbose", "ObjectName"]


def test_list_attribute_names_unknown_bean(client):
    with pytest.raises(NotFoundError):
        client.list_attribute_names("app:type=Nope")


def test_fetch_raw_value(client):
    value = client.fetch_raw_value("app:type=Memory", "HeapMemoryUsage")

    assert isinstance(value, Composite)
    assert value.fields["max"] == "200"


def test_context_manager_closes_transport_once(fake_transport):
    with JmxClient("localhost", 9999, transport=fake_transport) as jmx_client:
        jmx_client.close()

    assert fake_transport.close_calls == 1


def test_transport_closed_when_body_raises(fake_transport):
    with pytest.raises(NotFoundError):
        with JmxClient("localhost", 9999, transport=fake_transport) as jmx_client:
            jmx_client.fetch_raw_value("app:type=Nope", "Foo")

    assert fake_transport.close_calls == 1


@pytest.mark.parametrize("host, port", [("", 9999), ("localhost", 0), ("localhost", 70000)])
def test_invalid_location_raises(fake_transport, host, port):
    with pytest.raises(JmxConnectionError, match="Invalid host or port"):
        JmxClient(host, port, transport=fake_transport)

    assert fake_transport.close_calls == 1


def test_failed_connect_is_reported_and_released(mocker, fake_transport):
    mocker.patch.object(fake_transport, "version", side_effect=RuntimeError("refused"))

    with pytest.raises(JmxConnectionError, match="Cannot connect jmx server"):
        JmxClient("localhost", 9999, transport=fake_transport)

    assert fake_transport.close_calls == 1


def test_connection_error_from_transport_passes_through(mocker, fake_transport):
    mocker.patch.object(fake_transport, "version", side_effect=JmxConnectionError("Authentication failed"))

    with pytest.raises(JmxConnectionError, match="Authentication failed"):
        JmxClient("localhost", 9999, transport=fake_transport)


def test_default_transport_is_jolokia(mocker):
    transport = mocker.MagicMock()
    factory = mocker.patch("jkl.transports.jolokia.JolokiaTransport", return_value=transport)

    with JmxClient("jmx.example", 8778) as jmx_client:
        assert jmx_client.host == "jmx.example"

    assert factory.call_args.args == ("jmx.example", 8778)
    transport.version.assert_called_once_with()
    transport.close.assert_called_once_with()
