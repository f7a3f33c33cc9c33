"""Action plugins served to the workflow host.

Each plugin implements the ActionPlugin interface (execute a step, handle
an alert, describe itself).
"""

from interaction_plugin.core.plugins.base import ActionPlugin
from interaction_plugin.core.plugins.interaction import (
    PLUGIN_INFO,
    InteractionPlugin,
    parse_timeout,
)

PLUGIN_REGISTRY: dict[str, type] = {
    "interaction": InteractionPlugin,
}

__all__ = [
    "PLUGIN_REGISTRY",
    "PLUGIN_INFO",
    "ActionPlugin",
    "InteractionPlugin",
    "parse_timeout",
]
