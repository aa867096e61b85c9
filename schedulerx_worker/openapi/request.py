"""Common parameters of every management API request."""

import time
from typing import Any, Dict


class BaseRequest:
    """A request body built up as a map of named parameters."""

    def __init__(self) -> None:
        self.group_id = ""
        self.app_group_id = 0
        # Milliseconds since the epoch when the request was made.
        self.timestamp = int(time.time() * 1000)
        self.signature = ""
        self.operator = "openapi"
        self.namespace = ""
        self.namespace_source = ""
        self._params: Dict[str, Any] = {}

    def set_group_id(self, group_id: str) -> None:
        self.group_id = group_id
        self.set_param("groupId", group_id)

    def set_app_group_id(self, app_group_id: int) -> None:
        self.app_group_id = app_group_id
        self.set_param("appGroupId", app_group_id)

    def set_namespace(self, namespace: str) -> None:
        self.namespace = namespace
        self.set_param("namespace", namespace)

    def set_namespace_source(self, namespace_source: str) -> None:
        self.namespace_source = namespace_source
        self.set_param("namespaceSource", namespace_source)

    def set_param(self, key: str, value: Any) -> None:
        """Set one body parameter, replacing any earlier value."""
        self._params[key] = value

    def params(self) -> Dict[str, Any]:
        """Return a copy of the body parameters."""
        return dict(self._params)