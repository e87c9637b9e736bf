"""
Tests for the CvpApi endpoint wrappers.
"""

import json
import unittest
from unittest.mock import MagicMock

from cvp_client import ApiError, CvpApi, CvpClient, RequestError
from fakes import FakeCluster, login_ok, login_url, make_response, web_url


class TestCvpApiMapping(unittest.TestCase):
    """Wrappers map onto the client primitives with the right arguments."""

    def setUp(self):
        self.client = MagicMock(spec=CvpClient)
        self.api = CvpApi(self.client, request_timeout=12)

    def test_get_cvp_info(self):
        self.client.get.return_value = {"version": "2016.1.1"}
        self.assertEqual(self.api.get_cvp_info(), {"version": "2016.1.1"})
        self.client.get.assert_called_once_with("/cvpInfo/getCvpInfo.do", None, timeout=12)

    def test_get_users_sends_bare_queryparam(self):
        self.api.get_users()
        self.client.get.assert_called_once_with(
            "/user/getUsers.do",
            {"queryparam": None, "startIndex": 0, "endIndex": 0},
            timeout=12,
        )

    def test_get_configlets(self):
        self.api.get_configlets(type_="All")
        self.client.get.assert_called_once_with(
            "/configlet/getConfiglets.do",
            {"startIndex": 0, "endIndex": 0, "type": "All"},
            timeout=12,
        )

    def test_add_configlet_returns_key(self):
        self.client.post.return_value = {"data": "configlet_1_123"}
        key = self.api.add_configlet("api_test", "interface Ethernet1\n   shutdown")
        self.assertEqual(key, "configlet_1_123")
        args, kwargs = self.client.post.call_args
        self.assertEqual(args[0], "/configlet/addConfiglet.do")
        self.assertEqual(args[2], {"name": "api_test",
                                   "config": "interface Ethernet1\n   shutdown"})

    def test_delete_configlet_body_is_list(self):
        self.client.post.return_value = {"data": "success"}
        self.assertEqual(self.api.delete_configlet("api_test", "key_1"), "success")
        args, _kwargs = self.client.post.call_args
        self.assertEqual(args[2], [{"name": "api_test", "key": "key_1"}])

    def test_configlets_by_device_id(self):
        self.client.get.return_value = {"configletList": [{"name": "c1"}]}
        self.assertEqual(self.api.get_configlets_by_device_id("00:50:56:aa:bb:cc"),
                         [{"name": "c1"}])
        args, _kwargs = self.client.get.call_args
        self.assertEqual(args[1]["netElementId"], "00:50:56:aa:bb:cc")
        self.assertIsNone(args[1]["queryParam"])

    def test_task_not_found_returns_none(self):
        self.client.get.side_effect = ApiError(
            "GET /web/task/getTaskById.do: Request Error: errorCode: 142601: Invalid WorkOrderId")
        self.assertIsNone(self.api.get_task_by_id(9999))

    def test_task_other_api_error_propagates(self):
        self.client.get.side_effect = ApiError("errorCode: 1: Something else")
        with self.assertRaises(ApiError):
            self.api.get_task_by_id(1)

    def test_task_request_error_propagates(self):
        self.client.get.side_effect = RequestError(500, "boom")
        with self.assertRaises(RequestError):
            self.api.get_task_by_id(1)

    def test_pending_tasks(self):
        self.client.get.return_value = {"data": [{"workOrderId": "1"}]}
        self.assertEqual(self.api.get_pending_tasks(), [{"workOrderId": "1"}])

    def test_execute_task(self):
        self.api.execute_task("42")
        self.client.post.assert_called_once_with(
            "/task/executeTask.do", None, {"data": ["42"]}, timeout=12)

    def test_add_note_to_task(self):
        self.api.add_note_to_task("42", "hello")
        args, _kwargs = self.client.post.call_args
        self.assertEqual(args[2], {"workOrderId": "42", "note": "hello"})


class TestCvpApiEndToEnd(unittest.TestCase):
    """Wrappers running over a real CvpClient and a fake cluster."""

    def setUp(self):
        self.cluster = FakeCluster()
        self.cluster.add("POST", login_url("cvp1"), login_ok())
        patcher = self.cluster.patched()
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = CvpClient()
        self.client.connect(["cvp1"], "cvpadmin", "arista123")
        self.api = CvpApi(self.client)

    def test_delete_configlet_invalid_input(self):
        url = web_url("cvp1", "/configlet/deleteConfiglet.do")
        self.cluster.add("POST", url, make_response(
            200, '{"errorCode":"132718","errorMessage":"Invalid input parameters."}'))
        with self.assertRaises(ApiError) as ctx:
            self.api.delete_configlet("missing", "no-key")
        self.assertIn("132718", str(ctx.exception))
        self.assertEqual(self.cluster.count("POST", url), 1)
        sent = json.loads(self.cluster.last_call("POST", url)["data"])
        self.assertEqual(sent, [{"name": "missing", "key": "no-key"}])

    def test_get_configlet_by_name(self):
        url = web_url("cvp1", "/configlet/getConfigletByName.do?name=api_test")
        self.cluster.add("GET", url, make_response(200, '{"name": "api_test", "key": "k"}'))
        self.assertEqual(self.api.get_configlet_by_name("api_test"),
                         {"name": "api_test", "key": "k"})
        self.assertEqual(self.cluster.last_call("GET", url)["timeout"], (10, 30))


if __name__ == "__main__":
    unittest.main()
