"""
cvp_client.api
==============
Convenience wrappers that map CVP endpoints onto :meth:`CvpClient.get` and
:meth:`CvpClient.post`.

Only a handful of commonly used endpoints are covered; anything else can be
reached through the client primitives directly.
"""

from __future__ import annotations

from typing import Any

from .client import CvpClient
from .config import REQUEST_TIMEOUT
from .errors import ApiError
from .logging_setup import log

# ApiError messages that mean "no such task" rather than a failure
_TASK_NOT_FOUND = ("Invalid WorkOrderId", "Entity does not exist")


class CvpApi:
    """High-level CVP operations on top of a connected :class:`CvpClient`."""

    def __init__(self, client: CvpClient, request_timeout: float = REQUEST_TIMEOUT) -> None:
        self.client = client
        self.request_timeout = request_timeout

    def _get(self, endpoint: str, query=None) -> Any:
        return self.client.get(endpoint, query, timeout=self.request_timeout)

    def _post(self, endpoint: str, query=None, body=None) -> Any:
        return self.client.post(endpoint, query, body, timeout=self.request_timeout)

    # ------------------------------------------------------------------
    # Info / users
    # ------------------------------------------------------------------

    def get_cvp_info(self) -> dict:
        """Return version information, e.g. ``{"version": "2016.1.1"}``."""
        return self._get("/cvpInfo/getCvpInfo.do")

    def get_users(self, start: int = 0, end: int = 0) -> dict:
        return self._get("/user/getUsers.do",
                         {"queryparam": None, "startIndex": start, "endIndex": end})

    # ------------------------------------------------------------------
    # Configlets
    # ------------------------------------------------------------------

    def get_configlets(self, start: int = 0, end: int = 0, type_: str = "Configlet") -> dict:
        """
        Return configlet definitions (``total`` and ``data``).

        *type_* is one of All, Configlet, Builder, Draft, Builderwithoutdraft,
        Generated, IgnoreDraft.  ``end=0`` returns everything.
        """
        log.debug("get_configlets: start=%s, end=%s, type=%s", start, end, type_)
        return self._get("/configlet/getConfiglets.do",
                         {"startIndex": start, "endIndex": end, "type": type_})

    def get_configlet_by_name(self, name: str) -> dict:
        log.debug("get_configlet_by_name: %s", name)
        return self._get("/configlet/getConfigletByName.do", {"name": name})

    def add_configlet(self, name: str, config: str) -> str | None:
        """
        Create a configlet and return its key.

        Raises ApiError when the name exists already
        (errorCode 132518: Data already exists in Database).
        """
        log.debug("add_configlet: %s Config: %r", name, config)
        resp = self._post("/configlet/addConfiglet.do",
                          body={"name": name, "config": str(config)})
        return resp.get("data") if resp else None

    def update_configlet(self, name: str, key: str, config: str) -> str | None:
        log.debug("update_configlet: %s Key: %s Config: %r", name, key, config)
        resp = self._post("/configlet/updateConfiglet.do",
                          body={"name": name, "key": key, "config": config})
        return resp.get("data") if resp else None

    def delete_configlet(self, name: str, key: str) -> str | None:
        """
        Delete a configlet.

        An unknown name or key raises ApiError
        (errorCode 132718: Invalid input parameters).
        """
        log.debug("delete_configlet: %s Key: %s", name, key)
        resp = self._post("/configlet/deleteConfiglet.do",
                          body=[{"name": name, "key": key}])
        return resp.get("data") if resp else None

    def get_configlets_by_device_id(self, sys_mac: str, queryparam: str | None = None,
                                    start: int = 0, end: int = 0) -> list:
        """Return the configlets applied to the device with System MAC *sys_mac*."""
        log.debug("get_configlets_by_device_id: %s query=%r", sys_mac, queryparam)
        resp = self._get("/provisioning/getConfigletsByNetElementId.do",
                         {"netElementId": sys_mac, "queryParam": queryparam,
                          "startIndex": start, "endIndex": end})
        return resp.get("configletList", []) if resp else []

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def get_task_by_id(self, task_id) -> dict | None:
        """Return the task, or ``None`` when the server does not know the id."""
        log.debug("get_task_by_id: task_id: %s", task_id)
        try:
            return self._get("/task/getTaskById.do", {"taskId": task_id})
        except ApiError as exc:
            if any(marker in str(exc) for marker in _TASK_NOT_FOUND):
                return None
            raise

    def get_pending_tasks(self) -> list:
        log.debug("get_pending_tasks")
        try:
            resp = self._get("/task/getTasks.do",
                             {"queryparam": "Pending", "startIndex": 0, "endIndex": 0})
        except ApiError as exc:
            if any(marker in str(exc) for marker in _TASK_NOT_FOUND):
                return []
            raise
        return resp.get("data", []) if resp else []

    def add_note_to_task(self, task_id, note: str) -> Any:
        log.debug("add_note_to_task: task_id: %s, note: [%s]", task_id, note)
        return self._post("/task/addNoteToTask.do",
                          body={"workOrderId": task_id, "note": note})

    def execute_task(self, task_id) -> Any:
        log.debug("execute_task: task_id: %s", task_id)
        return self._post("/task/executeTask.do", body={"data": [task_id]})
