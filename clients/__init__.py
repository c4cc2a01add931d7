# Infrastructure clients
from clients.valkey_client import ValkeyClient
from clients.eventhub_client import (
    EventHubClient,
    EventHubError,
    EventHubUnavailableError,
    EventHubAuthError,
    EventHubRequestError,
    EventHubResponseError,
)
