"""Clients for the LCU REST API, the LCU WebSocket and the live client data API."""

from shaco.clients.rest_client import LcuRestClient
from shaco.clients.ingame_client import IngameClient, get_ingame_client, close_ingame_client
from shaco.clients.websocket_client import LcuWebsocketClient
