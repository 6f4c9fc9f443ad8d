"""Wire envelope models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class JsonRpcRequest(BaseModel):
    """An inbound JSON-RPC call or notification.

    ``id`` may be any JSON value. Whether the member was present at all is
    tracked separately from its value: ``{"id": null}`` is a call,
    a message without ``id`` is a notification.
    """

    model_config = ConfigDict(extra="ignore")

    jsonrpc: Literal["2.0"] = Field(default="2.0", description="Protocol tag")
    method: str = Field(..., description="Procedure name")
    id: Any = Field(default=None, description="Opaque correlation identifier")
    params: dict[str, Any] | None = Field(default=None, description="Parameter payload")

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


class InitializeParams(BaseModel):
    """params of the initialize procedure (all optional, clients vary)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    protocol_version: str | None = Field(default=None, alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    client_info: dict[str, Any] | None = Field(default=None, alias="clientInfo")


class ToolCallParams(BaseModel):
    """params of tools/call."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Tool name")
    arguments: dict[str, Any] | None = Field(default=None, description="Tool arguments")
