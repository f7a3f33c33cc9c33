"""Schemas for the action-plugin contract between host and plugin."""

from typing import (
    Any,
    Dict,
    List,
    Optional,
)

from pydantic import (
    BaseModel,
    Field,
)

from interaction_plugin.schemas.execution import (
    Execution,
    ExecutionStep,
)


class ParamDefinition(BaseModel):
    """Describes one parameter an action accepts."""

    key: str
    type: str = "text"
    default: str = ""
    required: bool = False
    description: str = ""


class ActionDefinition(BaseModel):
    """Describes the action a plugin contributes to the host catalog."""

    name: str
    description: str = ""
    plugin: str
    icon: str = ""
    category: str = "Utility"
    params: List[ParamDefinition] = Field(default_factory=list)


class PluginInfo(BaseModel):
    """Static descriptor used by the host for discovery and UI rendering."""

    model_config = {"frozen": True}

    name: str
    type: str = "action"
    version: str
    author: str = ""
    action: ActionDefinition
    endpoints: Dict[str, Any] = Field(default_factory=dict)


class ExecuteTaskRequest(BaseModel):
    """Request from the host to run one step."""

    execution: Execution
    step: ExecutionStep


class AlertHandlerRequest(BaseModel):
    """Request from the host to handle an incoming alert."""

    plugin: str = ""
    body: Dict[str, Any] = Field(default_factory=dict)


class PluginResponse(BaseModel):
    """Structured result returned to the host."""

    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = Field(default=None, description="Error message when the invocation failed")
