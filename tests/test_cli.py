"""
Tests for the command-line interface and logging setup.
"""

import io
import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from cvp_client import cli
from cvp_client.errors import LoginError
from cvp_client.logging_setup import log, setup_logging


class TestParseArgs(unittest.TestCase):
    def test_nodes_comma_separated(self):
        args = cli.parse_args(["--nodes", "cvp1, cvp2,cvp3", "get", "/x.do"])
        self.assertEqual(args.nodes, ["cvp1", "cvp2", "cvp3"])
        self.assertEqual(args.method, "get")
        self.assertEqual(args.endpoint, "/x.do")

    def test_query_pairs(self):
        args = cli.parse_args(["get", "/x.do", "-q", "startIndex=0", "-q", "queryparam"])
        self.assertEqual(args.query, [("startIndex", "0"), ("queryparam", None)])

    def test_defaults(self):
        args = cli.parse_args(["get", "/x.do"])
        self.assertEqual(args.protocol, "https")
        self.assertIsNone(args.port)
        self.assertTrue(args.verify_ssl)

    def test_unknown_protocol_rejected(self):
        with patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                cli.parse_args(["--protocol", "ftp", "get", "/x.do"])


class TestMain(unittest.TestCase):
    def setUp(self):
        patcher = patch("cvp_client.cli.setup_logging")
        patcher.start()
        self.addCleanup(patcher.stop)
        client_patcher = patch("cvp_client.cli.CvpClient")
        self.client_cls = client_patcher.start()
        self.addCleanup(client_patcher.stop)
        self.client = self.client_cls.return_value
        self.client.__enter__.return_value = self.client

    def test_get_prints_json(self):
        self.client.get.return_value = {"version": "2016.1.1"}
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            cli.main(["--nodes", "cvp1,cvp2", "--password", "pw",
                      "get", "/cvpInfo/getCvpInfo.do"])
        self.assertEqual(json.loads(out.getvalue()), {"version": "2016.1.1"})
        args, kwargs = self.client.connect.call_args
        self.assertEqual(args, (["cvp1", "cvp2"], "cvpadmin", "pw"))
        self.assertEqual(kwargs["protocol"], "https")
        self.client.get.assert_called_once_with("/cvpInfo/getCvpInfo.do", None)

    def test_post_passes_body(self):
        self.client.post.return_value = {"data": "success"}
        with patch("sys.stdout", new_callable=io.StringIO):
            cli.main(["--nodes", "cvp1", "--password", "pw", "post",
                      "/task/executeTask.do", "--body", '{"data": ["42"]}'])
        self.client.post.assert_called_once_with(
            "/task/executeTask.do", None, '{"data": ["42"]}')

    def test_client_error_exits_1(self):
        self.client.connect.side_effect = LoginError("no node")
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--nodes", "cvp1", "--password", "pw", "get", "/x.do"])
        self.assertEqual(ctx.exception.code, 1)

    def test_missing_nodes_exits_2(self):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--nodes", "", "--password", "pw", "get", "/x.do"])
        self.assertEqual(ctx.exception.code, 2)
        self.client.connect.assert_not_called()

    def test_invalid_body_exits_2(self):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--nodes", "cvp1", "--password", "pw", "post", "/x.do",
                      "--body", "{not json"])
        self.assertEqual(ctx.exception.code, 2)

    def test_prompts_for_missing_password(self):
        self.client.get.return_value = {}
        with patch("getpass.getpass", return_value="typed") as prompt, \
                patch("sys.stdout", new_callable=io.StringIO):
            cli.main(["--nodes", "cvp1", "--password", "", "get", "/x.do"])
        prompt.assert_called_once()
        self.assertEqual(self.client.connect.call_args[0][2], "typed")


class TestSetupLogging(unittest.TestCase):
    def tearDown(self):
        for handler in list(log.handlers):
            handler.close()
        log.handlers.clear()

    def test_console_handler_level(self):
        setup_logging(debug=False)
        self.assertEqual(len(log.handlers), 1)
        self.assertEqual(log.handlers[0].level, logging.INFO)

    def test_debug_level(self):
        setup_logging(debug=True)
        self.assertEqual(log.level, logging.DEBUG)

    def test_log_file_captures_debug(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "logs" / "cvp.log"
            setup_logging(log_file=str(path))
            log.debug("detail line")
            for handler in log.handlers:
                handler.flush()
            self.assertIn("detail line", path.read_text(encoding="utf-8"))
            for handler in list(log.handlers):
                handler.close()
            log.handlers.clear()


if __name__ == "__main__":
    unittest.main()
