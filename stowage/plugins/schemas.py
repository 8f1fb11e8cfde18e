"""Wire schemas for the server status API."""

from pydantic import BaseModel, ConfigDict, Field


class PluginInfo(BaseModel):
    """A registered plugin as exposed over the status API.

    ``builtIn`` may be missing from payloads written by older servers; it
    reads as ``False``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    kind: str
    command: str | None = None
    built_in: bool = Field(default=False, alias="builtIn")


class ServerStatus(BaseModel):
    """Server status response: version plus classified plugin list."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    server_version: str = Field(default="", alias="serverVersion")
    plugins: list[PluginInfo] = Field(default_factory=list)

    def find_plugins(self, name: str) -> list[PluginInfo]:
        """Return every registration of ``name``, one per kind."""
        return [plugin for plugin in self.plugins if plugin.name == name]
