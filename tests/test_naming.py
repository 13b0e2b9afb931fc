"""
Unit tests for kickstart.naming module
"""
import unittest

from kickstart.naming import validate_package_name


class TestValidatePackageName(unittest.TestCase):
    """npm package naming rules"""

    def test_simple_names_are_valid(self):
        for name in ("app", "my-app", "my_app.js", "@scope/my-app", "1app"):
            result = validate_package_name(name)
            self.assertTrue(result.valid_for_new_packages, name)
            self.assertEqual(result.errors, [])

    def test_uppercase_and_spaces(self):
        result = validate_package_name("My App")
        self.assertIn("name can only contain URL-friendly characters", result.errors)
        self.assertIn("name can no longer contain capital letters", result.warnings)
        self.assertFalse(result.valid_for_old_packages)

    def test_uppercase_alone_is_a_warning(self):
        result = validate_package_name("MyApp")
        self.assertEqual(result.errors, [])
        self.assertFalse(result.valid_for_new_packages)
        self.assertTrue(result.valid_for_old_packages)

    def test_empty_name(self):
        result = validate_package_name("")
        self.assertIn("name length must be greater than zero", result.errors)

    def test_none(self):
        self.assertEqual(validate_package_name(None).errors, ["name cannot be null"])

    def test_leading_period_and_underscore(self):
        self.assertIn("name cannot start with a period", validate_package_name(".app").errors)
        self.assertIn("name cannot start with an underscore", validate_package_name("_app").errors)

    def test_surrounding_spaces(self):
        result = validate_package_name(" app ")
        self.assertIn("name cannot contain leading or trailing spaces", result.errors)

    def test_blacklisted(self):
        result = validate_package_name("node_modules")
        self.assertIn("node_modules is a blacklisted name", result.errors)

    def test_core_module_warning(self):
        result = validate_package_name("http")
        self.assertEqual(result.errors, [])
        self.assertIn("http is a core module name", result.warnings)

    def test_too_long(self):
        result = validate_package_name("a" * 215)
        self.assertIn("name can no longer contain more than 214 characters", result.warnings)

    def test_special_characters(self):
        result = validate_package_name("app!")
        self.assertEqual(result.errors, [])
        self.assertTrue(any("special characters" in w for w in result.warnings))

    def test_path_is_not_url_friendly(self):
        result = validate_package_name("./app")
        self.assertIn("name cannot start with a period", result.errors)
        self.assertIn("name can only contain URL-friendly characters", result.errors)

    def test_bad_scope(self):
        result = validate_package_name("@my scope/app")
        self.assertIn("name can only contain URL-friendly characters", result.errors)


if __name__ == '__main__':
    unittest.main()
