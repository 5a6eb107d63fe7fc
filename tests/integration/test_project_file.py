"""
Integration tests that load a realistic build definition file.

Tests focus on walking the parsed tree the way a project loader does and on
errors that point at the exact place in the file.
"""

import io
import unittest
from decimal import Decimal

from jsonpinpoint import (
    FileFormatError,
    JsonContent,
    NumberKind,
    ParseError,
    parse_object,
)
from jsonpinpoint.core.position import Position
from jsonpinpoint.security.exceptions import IllegalPrimitive, MalformedObject

PROJECT_JSON = """\
{
    "version": "2.1.0-beta",
    "description": "Sample build definition used by the loader tests.",
    "compilationOptions": { "define": [ "TRACE", "DEBUG" ], "allowUnsafe": false, "warningsAsErrors": true },
    "dependencies": {
        "Sample.Runtime.Common": { "version": "2.1.0-*", "type": "build" },
        "Sample.Runtime.Interfaces": "2.1.0-*",
        "Sample.Caching": "2.0.3"
    },
    "frameworks": {
        "net451": {
            "frameworkAssemblies": {
                "System.Collections": "",
                "System.IO": ""
            }
        },
        "netcore50": {
            "dependencies": {
                "System.Collections.Concurrent": "4.0.10-beta-*",
                "System.IO.FileSystem": "4.0.0-beta-*"
            }
        }
    },
    "buildNumber": 1042,
    "timestampTicks": 635712345678901234,
    "coverage": 87.25,
    "scale": 1.5e-3,
    "scripts": {
        "postbuild": [
            "%project:Directory%/../build/copy %project:BuildOutputDir%/Debug/net451/*.*",
            "%project:Directory%/../build/copy %project:BuildOutputDir%/Debug/netcore50/*.*"
        ]
    }
}
"""


class TestProjectFile(unittest.TestCase):
    """Test reading a complete project file through the accessors."""

    def setUp(self):
        self.project = parse_object(PROJECT_JSON)

    def test_line_count(self):
        self.assertEqual(JsonContent(PROJECT_JSON).total_lines, 34)

    def test_top_level_members(self):
        self.assertEqual(self.project.get_string("version"), "2.1.0-beta")
        self.assertEqual(
            list(self.project),
            [
                "version",
                "description",
                "compilationOptions",
                "dependencies",
                "frameworks",
                "buildNumber",
                "timestampTicks",
                "coverage",
                "scale",
                "scripts",
            ],
        )

    def test_compilation_options(self):
        options = self.project.get_object("compilationOptions")
        self.assertEqual(options.get_string_array("define"), ["TRACE", "DEBUG"])
        self.assertFalse(options.get_boolean("allowUnsafe", True))
        self.assertTrue(options.get_nullable_boolean("warningsAsErrors"))
        self.assertIsNone(options.get_nullable_boolean("optimize"))

    def test_dependencies(self):
        dependencies = self.project.get_object("dependencies")
        self.assertEqual(
            dependencies.get_object("Sample.Runtime.Common").get_string("type"), "build"
        )
        self.assertEqual(dependencies.get_string("Sample.Runtime.Interfaces"), "2.1.0-*")
        self.assertIsNone(dependencies.get_object("Sample.Caching"))

    def test_frameworks(self):
        frameworks = self.project.get_object("frameworks")
        self.assertEqual(list(frameworks), ["net451", "netcore50"])

        assemblies = frameworks.get_object("net451").get_object("frameworkAssemblies")
        self.assertEqual(assemblies.get_string("System.IO"), "")

    def test_number_kinds(self):
        expected = {
            "buildNumber": (1042, NumberKind.INT32),
            "timestampTicks": (635712345678901234, NumberKind.INT64),
            "coverage": (Decimal("87.25"), NumberKind.DECIMAL),
            "scale": (0.0015, NumberKind.FLOAT64),
        }
        for key, (value, kind) in expected.items():
            with self.subTest(key=key):
                number = self.project[key]
                self.assertEqual(number.value, value)
                self.assertEqual(number.kind, kind)

    def test_scripts(self):
        postbuild = self.project.get_object("scripts").get_string_array("postbuild")
        self.assertEqual(len(postbuild), 2)
        self.assertTrue(postbuild[0].startswith("%project:Directory%"))

    def test_value_positions(self):
        self.assertEqual(self.project.position, Position(0, 0))
        self.assertEqual(self.project["buildNumber"].position, Position(23, 19))

    def test_loader_error_points_at_value(self):
        value = self.project["buildNumber"]
        error = FileFormatError.from_value("Unsupported build number", value)
        error = error.with_path("src/Sample/project.json")

        self.assertEqual(
            str(error),
            "Unsupported build number at line 24, column 20 in src/Sample/project.json",
        )


class TestProjectFileSources(unittest.TestCase):
    """Test that every input form yields the same tree."""

    def test_stream_with_byte_order_mark(self):
        stream = io.BytesIO(PROJECT_JSON.encode("utf-8-sig"))
        self.assertEqual(parse_object(stream), parse_object(PROJECT_JSON))
        self.assertFalse(stream.closed)

    def test_windows_line_endings(self):
        project = parse_object(PROJECT_JSON.replace("\n", "\r\n"))
        self.assertEqual(project, parse_object(PROJECT_JSON))
        self.assertEqual(project["buildNumber"].position, Position(23, 19))


class TestBrokenProjectFile(unittest.TestCase):
    """Test errors raised for damaged project files."""

    def test_unquoted_version(self):
        broken = PROJECT_JSON.replace('"Sample.Caching": "2.0.3"', '"Sample.Caching": 2.0.3')
        with self.assertRaises(IllegalPrimitive) as cm:
            parse_object(broken)

        error = cm.exception.with_path("project.json")
        self.assertEqual(error.token, "2.0.3")
        self.assertEqual(error.position, Position(7, 30))
        self.assertIn("at line 8, column 31 in project.json", str(error))
        self.assertIn('"Sample.Caching": 2.0.3', error.context.line_text)

    def test_missing_comma(self):
        broken = PROJECT_JSON.replace('"coverage": 87.25,', '"coverage": 87.25')
        with self.assertRaises(MalformedObject) as cm:
            parse_object(broken)
        self.assertEqual(cm.exception.position, Position(26, 4))

    def test_truncated_file(self):
        with self.assertRaises(ParseError):
            parse_object(PROJECT_JSON[: len(PROJECT_JSON) // 2])


if __name__ == '__main__':
    unittest.main()
