"""Schemas for executions and steps as stored by the Execution Status Service."""

from datetime import datetime
from enum import Enum
from typing import (
    Any,
    Dict,
    List,
    Optional,
    Union,
)

from pydantic import (
    BaseModel,
    Field,
    field_validator,
)


class StepStatus(str, Enum):
    """Status of a single execution step."""

    PENDING = "pending"
    RUNNING = "running"
    INTERACTION_WAITING = "interactionWaiting"
    SUCCESS = "success"
    CANCELED = "canceled"
    ERROR = "error"


class ExecutionStatus(str, Enum):
    """Coarse status of a whole workflow execution."""

    PENDING = "pending"
    RUNNING = "running"
    INTERACTION_WAITING = "interactionWaiting"
    CANCELED = "canceled"
    SUCCESS = "success"
    ERROR = "error"


class StepAction(BaseModel):
    """The action a step runs, with the parameters the host supplied.

    Hosts send params either as a mapping or as a list of
    ``{"key": ..., "value": ...}`` entries; both end up as a mapping.
    """

    name: str = Field(default="", description="Action name")
    plugin: str = Field(default="interaction", description="Plugin id that runs the action")
    params: Dict[str, str] = Field(default_factory=dict, description="Parameter key to value")

    @field_validator("params", mode="before")
    @classmethod
    def _normalize_params(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, list):
            params = {}
            for entry in value:
                if isinstance(entry, dict) and "key" in entry:
                    params[str(entry["key"])] = "" if entry.get("value") is None else str(entry["value"])
            return params
        if isinstance(value, dict):
            return {str(k): "" if v is None else str(v) for k, v in value.items()}
        return value

    def get_param(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the raw string value of a parameter."""
        return self.params.get(key, default)


class ExecutionStep(BaseModel):
    """Snapshot of a step record.

    Attributes:
        id: Opaque step identifier.
        messages: Human-readable progress messages, in order.
        status: Current step status. Values the plugin does not know stay raw strings.
        interactive: Whether the step waits on a human.
        started_at: When the step started waiting.
        finished_at: When the step reached a terminal status.
        interacted: Whether a decision (human or timeout) was applied.
        interaction_approved: Whether the decision was an approval.
        interaction_rejected: Whether the decision was a rejection.
        action: The action definition attached by the host.
    """

    id: str
    messages: List[str] = Field(default_factory=list)
    status: Union[StepStatus, str] = Field(default=StepStatus.PENDING, union_mode="left_to_right")
    interactive: bool = False
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    interacted: bool = False
    interaction_approved: bool = False
    interaction_rejected: bool = False
    action: StepAction = Field(default_factory=StepAction)

    @field_validator("messages", mode="before")
    @classmethod
    def _normalize_messages(cls, value: Any) -> Any:
        return [] if value is None else value


class StepPatch(BaseModel):
    """Partial step update.

    Only fields that were explicitly set are sent to the status service;
    everything else is left untouched there. Messages are appended to the
    step's history rather than replacing it.
    """

    id: str
    messages: Optional[List[str]] = None
    status: Optional[StepStatus] = None
    interactive: Optional[bool] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    interacted: Optional[bool] = None
    interaction_approved: Optional[bool] = None
    interaction_rejected: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize only the explicitly-set fields to JSON-compatible values."""
        return self.model_dump(mode="json", exclude_unset=True)


class Execution(BaseModel):
    """A workflow execution, the parent of its steps."""

    id: str
    status: ExecutionStatus = Field(default=ExecutionStatus.RUNNING)
