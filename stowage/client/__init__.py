"""HTTP clients for talking to a running stowage server."""

from stowage.client.status import ServerStatusClient

__all__ = ["ServerStatusClient"]
