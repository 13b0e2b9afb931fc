"""
Unit tests for kickstart.utils module
"""
import unittest
import tempfile
import os
import subprocess
from unittest.mock import patch

from kickstart.utils import (
    run_command,
    has_command,
    is_dir,
    trim,
    capitalize
)


class TestRunCommand(unittest.TestCase):
    """Test the run_command utility function"""

    def test_run_command_capture_output(self):
        """Test run_command with capture_output=True"""
        result = run_command("echo 'test'", capture_output=True)
        self.assertEqual(result, "test")

    def test_run_command_no_capture(self):
        """Test run_command with capture_output=False"""
        result = run_command("echo 'test'", capture_output=False)
        self.assertIsNone(result)

    def test_run_command_failure_unchecked(self):
        """Test run_command with failing command"""
        result = run_command("false", capture_output=True, check=False)
        self.assertEqual(result, "")

    def test_run_command_failure_raises(self):
        with self.assertRaises(subprocess.CalledProcessError):
            run_command("exit 3", log_stderr=False)

    def test_run_command_with_cwd(self):
        """Test run_command with different working directory"""
        with tempfile.TemporaryDirectory() as temp_dir:
            result = run_command("pwd", cwd=temp_dir, capture_output=True)
            self.assertEqual(os.path.realpath(result.strip()), os.path.realpath(temp_dir))

    def test_run_command_env(self):
        result = run_command("echo $KICKSTART_TEST_VALUE", capture_output=True,
                             env={"KICKSTART_TEST_VALUE": "hello"})
        self.assertEqual(result, "hello")


class TestHelpers(unittest.TestCase):

    @patch('kickstart.utils.shutil.which')
    def test_has_command(self, mock_which):
        mock_which.return_value = "/usr/bin/yarn"
        self.assertTrue(has_command("yarn"))
        mock_which.return_value = None
        self.assertFalse(has_command("yarn"))

    def test_is_dir(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            self.assertTrue(is_dir(temp_dir))
            self.assertFalse(is_dir(os.path.join(temp_dir, "missing")))

    def test_trim(self):
        text = """
            first
              indented
        """
        self.assertEqual(trim(text), "first\n  indented")

    def test_capitalize(self):
        self.assertEqual(capitalize("name cannot be null"), "Name cannot be null")
        self.assertEqual(capitalize(""), "")


if __name__ == '__main__':
    unittest.main()
