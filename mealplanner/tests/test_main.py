import io
import os
import tempfile
import unittest
from unittest import mock

from mealplanner.main import main
from mealplanner.utilities.network import get_local_ip


class TestMain(unittest.TestCase):

    def test_shell_session_is_saved(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "plans", "data.csv")
            script = io.StringIO("3\n2025-09-14\n0\n")
            with mock.patch("sys.stdin", script), mock.patch("sys.stdout", new_callable=io.StringIO):
                main(["shell", "--file", path])
            with open(path, encoding="utf-8") as f:
                self.assertIn("2025-09-14,_EMPTY_,_EMPTY_,_EMPTY_,_EMPTY_", f.read().splitlines())

    def test_local_ip_is_a_string(self):
        self.assertIsInstance(get_local_ip(), str)


if __name__ == '__main__':
    unittest.main()
