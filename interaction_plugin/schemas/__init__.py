"""This file contains the schemas for the plugin."""

from interaction_plugin.schemas.execution import (
    Execution,
    ExecutionStatus,
    ExecutionStep,
    StepAction,
    StepPatch,
    StepStatus,
)
from interaction_plugin.schemas.plugin import (
    ActionDefinition,
    AlertHandlerRequest,
    ExecuteTaskRequest,
    ParamDefinition,
    PluginInfo,
    PluginResponse,
)

__all__ = [
    "Execution",
    "ExecutionStatus",
    "ExecutionStep",
    "StepAction",
    "StepPatch",
    "StepStatus",
    "ActionDefinition",
    "AlertHandlerRequest",
    "ExecuteTaskRequest",
    "ParamDefinition",
    "PluginInfo",
    "PluginResponse",
]
