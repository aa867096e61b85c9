"""Discovery of the active scheduling server for each application group."""

import json
import queue
import re
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import quote_plus

from schedulerx_worker import logger
from schedulerx_worker.openapi.client import OpenApiClient, OpenApiError, get_openapi_client

SERVICE_DISCOVER_INTERVAL = 5.0
ACTIVE_SERVER_QUERY_URI = "/worker/v1/appgroup/getLeaderAddr"
APP_GROUP_URL = "/worker/v1/appgroup/getId"
GROUP_HAS_CHILD = 300

_INT_RE = re.compile(r"[+-]?[0-9]+")


class DiscoveryError(Exception):
    """The console could not tell where the server is or what a group's id is."""


@dataclass(frozen=True)
class TriggerEvent:
    """A child group split off from a scaled parent group."""

    child_group_id: str
    child_app_key: str
    parent_group_id: str


trigger_queue: "queue.Queue[TriggerEvent]" = queue.Queue(maxsize=1000)


def _lookup(obj: Mapping[str, Any], name: str) -> Any:
    if name in obj:
        return obj[name]
    lowered = name.lower()
    for key, value in obj.items():
        if isinstance(key, str) and key.lower() == lowered:
            return value
    return None


def _get(client: Optional[OpenApiClient], url: str) -> bytes:
    if client is None:
        raise DiscoveryError("management API client is not initialised")
    try:
        status, body = client.http_get(url)
    except OpenApiError as exc:
        raise DiscoveryError(f"http.Get error {exc}") from exc
    if status != 200:
        raise DiscoveryError(f"http.Get statusCode {status}")
    return body


def _parse_object(text: Any, what: str, url: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError, UnicodeDecodeError) as exc:
        raise DiscoveryError(f"unmarshal {what}[{text!r}] fail {exc}, url={url}") from exc
    if not isinstance(data, dict):
        raise DiscoveryError(f"unmarshal {what}[{text!r}] fail: not an object, url={url}")
    return data


class ServiceDiscovery:
    """Polls the console for the active server address of one group."""

    def __init__(
        self,
        client: Optional[OpenApiClient] = None,
        interval: float = SERVICE_DISCOVER_INTERVAL,
        triggers: "Optional[queue.Queue[TriggerEvent]]" = None,
    ) -> None:
        self.client = client if client is not None else get_openapi_client()
        self.interval = interval
        self._triggers = triggers if triggers is not None else trigger_queue
        self._active_server = ""
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        # Holds a pending signal when the active server changed.
        self.changed: "queue.Queue[bool]" = queue.Queue(maxsize=1)

    @property
    def active_server(self) -> str:
        with self._lock:
            return self._active_server

    def query_active_server(self, group_id: str, app_key: str) -> str:
        """Ask the console for the leader address, queueing any child groups it reports."""
        client = self.client
        domain = client.domain if client is not None else ""
        url = f"http://{domain}{ACTIVE_SERVER_QUERY_URI}?groupId={group_id}&appKey={quote_plus(app_key)}"
        if client is not None and client.namespace:
            url += "&namespace=" + client.namespace
        if client is not None and client.namespace_source:
            url += "&namespaceSource=" + client.namespace_source
        url += "&enableScale=true"

        body = _get(client, url)
        data = _parse_object(body, "resp body", url)
        if _lookup(data, "Success") is not True:
            raise DiscoveryError(
                f"result is not success requestId:{_lookup(data, 'RequestId')} "
                f"message:{_lookup(data, 'Message')}, url={url}"
            )
        payload = _lookup(data, "Data")
        if not isinstance(payload, str):
            raise DiscoveryError(f"unexpected data {payload!r}, url={url}")
        if _lookup(data, "Code") != GROUP_HAS_CHILD:
            return payload

        # The group scaled out into child groups, each needing its own discovery.
        group_result = _parse_object(payload, "group result", url)
        children = _lookup(group_result, "GroupIdMap") or {}
        if not isinstance(children, dict):
            raise DiscoveryError(f"unmarshal group result[{payload}] fail: bad GroupIdMap, url={url}")
        for child_group_id, child_app_key in children.items():
            self._triggers.put(TriggerEvent(child_group_id, str(child_app_key), group_id))
        leader = _lookup(group_result, "CurrentLeaderAddr")
        return leader if isinstance(leader, str) else ""

    def refresh_active_server(self, group_id: str, app_key: str) -> None:
        """Query once and record a changed address, signalling the change."""
        try:
            address = self.query_active_server(group_id, app_key)
        except DiscoveryError as exc:
            logger.error("query active server from console failed err:%s", exc)
            return
        with self._lock:
            previous = self._active_server
            changed = bool(address) and address != previous
            if changed:
                self._active_server = address
        if changed:
            client = self.client
            logger.warning(
                "[ServerDiscovery]: active server change from [%s] to [%s], groupId=%s, namespace=%s, namespaceSource=%s",
                previous,
                address,
                group_id,
                client.namespace if client else "",
                client.namespace_source if client else "",
            )
            try:
                self.changed.put_nowait(True)
            except queue.Full:
                pass
        logger.debug("active server: %s", self.active_server)

    def start(self, group_id: str, app_key: str) -> None:
        """Refresh every interval until stopped; blocks the calling thread."""
        while not self._stopped.wait(self.interval):
            self.refresh_active_server(group_id, app_key)
        logger.info("receive stop signal")

    def stop(self) -> None:
        self._stopped.set()


_discoveries: Dict[str, ServiceDiscovery] = {}
_discoveries_lock = threading.Lock()


def get_discovery(group_id: str) -> ServiceDiscovery:
    """Return the process-wide discovery of a group, creating it if needed."""
    with _discoveries_lock:
        discovery = _discoveries.get(group_id)
        if discovery is None:
            discovery = ServiceDiscovery(get_openapi_client())
            _discoveries[group_id] = discovery
        return discovery


class GroupManager:
    """Tracks the groups this worker serves and keeps their discoveries running."""

    def __init__(
        self,
        client: Optional[OpenApiClient] = None,
        discovery_factory: Optional[Callable[[str], ServiceDiscovery]] = None,
        triggers: "Optional[queue.Queue[TriggerEvent]]" = None,
        listen: bool = True,
    ) -> None:
        self.client = client if client is not None else get_openapi_client()
        self._discovery_factory = discovery_factory or get_discovery
        self._triggers = triggers if triggers is not None else trigger_queue
        self._lock = threading.Lock()
        self._app_group_ids: Dict[str, int] = {}
        self._app_keys: Dict[str, str] = {}
        self._discoveries: List[ServiceDiscovery] = []
        self._stopped = threading.Event()
        if listen:
            threading.Thread(target=self._listen, name="group-triggers", daemon=True).start()

    def _listen(self) -> None:
        while not self._stopped.is_set():
            try:
                event = self._triggers.get(timeout=0.1)
            except queue.Empty:
                continue
            logger.info(
                "receive trigger event childGroupId: %s parentGroupId:%s",
                event.child_group_id,
                event.parent_group_id,
            )
            self.start_server_discovery(event.child_group_id, event.child_app_key)

    def group_id_to_app_group_id(self) -> Dict[str, int]:
        """Return a copy of the known group id to app group id mapping."""
        with self._lock:
            return dict(self._app_group_ids)

    def app_key_by_group_id(self, group_id: str) -> str:
        """Return the app key registered for a group, or an empty string."""
        with self._lock:
            return self._app_keys.get(group_id, "")

    def app_group_id(self, group_id: str, app_key: str) -> int:
        """Ask the console for the numeric id of a group."""
        client = self.client
        if client is None or not client.domain:
            raise DiscoveryError("domain missing")
        if client.namespace:
            url = (
                f"http://{client.domain}{APP_GROUP_URL}?groupId={group_id}"
                f"&namespace={client.namespace}&appKey={quote_plus(app_key)}"
            )
            if client.namespace_source:
                url += "&namespaceSource=" + client.namespace_source
        else:
            url = f"http://{client.domain}{APP_GROUP_URL}?groupId={group_id}&appKeys={app_key}"

        try:
            status, body = client.http_get(url)
        except OpenApiError as exc:
            raise DiscoveryError(f"request appGroupId failed, groupId:{group_id}, err:{exc}") from exc
        if status != 200:
            raise DiscoveryError(f"request appGroupId failed, groupId:{group_id}, status:{status}")
        try:
            data = _parse_object(body, "resp body", url)
        except DiscoveryError as exc:
            raise DiscoveryError(f"request appGroupId failed, groupId:{group_id}, {exc}") from exc
        if _lookup(data, "success") is not True:
            raise DiscoveryError(
                f"request appGroupId failed, groupId:{group_id}, message:{_lookup(data, 'message')}"
            )
        value = _lookup(data, "data")
        text = value if isinstance(value, str) else ""
        if not _INT_RE.fullmatch(text):
            raise DiscoveryError(f"request appGroupId failed, data expect int, but got={value}")
        return int(text)

    def start_server_discovery(self, group_id: str, app_key: str) -> None:
        """Begin discovery for a group unless it is already known."""
        with self._lock:
            if group_id in self._app_group_ids:
                return
        discovery = self._discovery_factory(group_id)
        discovery.refresh_active_server(group_id, app_key)
        threading.Thread(
            target=discovery.start, args=(group_id, app_key), name=f"discovery-{group_id}", daemon=True
        ).start()
        with self._lock:
            self._discoveries.append(discovery)

        try:
            app_group_id = self.app_group_id(group_id, app_key)
        except DiscoveryError as exc:
            namespace = self.client.namespace if self.client else ""
            logger.error("appendGroupId error groupId=%s is not exist, namespace=%s %s", group_id, namespace, exc)
        else:
            with self._lock:
                self._app_group_ids[group_id] = app_group_id
        with self._lock:
            self._app_keys[group_id] = app_key

    def stop(self) -> None:
        """Stop listening for child groups and stop every discovery started here."""
        self._stopped.set()
        with self._lock:
            discoveries = list(self._discoveries)
        for discovery in discoveries:
            discovery.stop()


_group_manager: Optional[GroupManager] = None
_group_manager_lock = threading.Lock()


def get_group_manager() -> GroupManager:
    """Return the process-wide group manager."""
    global _group_manager
    with _group_manager_lock:
        if _group_manager is None:
            _group_manager = GroupManager(get_openapi_client())
        return _group_manager