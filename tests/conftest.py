import pytest

from fakes import make_client, server_error_handler


@pytest.fixture
def unconfigured_client():
    """A client without an API key; it must never reach the transport."""
    return make_client(server_error_handler, api_key="")
