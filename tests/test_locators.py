import os
import shutil
import tempfile
import unittest
from unittest.mock import MagicMock

from benchbuilder.characteristics import BenchmarkCase, BenchmarkDescriptor
from benchbuilder.locators import (
    ExplicitProjectLocator,
    LocatorArgs,
    ProjectFileLocator,
    ProjectFileNotFoundError,
    locate_project_file,
)


class TestLocateProjectFile(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.logger = MagicMock()
        self.project_dir = os.path.join(self.test_dir, "src", "Bench")
        os.makedirs(self.project_dir)
        self.project_file = os.path.join(self.project_dir, "Bench.csproj")
        with open(self.project_file, "w") as f:
            f.write("<Project />")
        self.assembly = os.path.join(self.project_dir, "bin", "Release", "net8.0", "Bench.dll")

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def _case(self, *locators, assembly_location=None):
        descriptor = BenchmarkDescriptor("Bench", assembly_location or self.assembly)
        return BenchmarkCase(descriptor, file_locators=locators)

    def test_first_existing_candidate_wins(self):
        missing = os.path.join(self.test_dir, "Missing.csproj")
        case = self._case(ExplicitProjectLocator(missing), ExplicitProjectLocator(self.project_file))

        self.assertEqual(locate_project_file(case, self.logger), os.path.abspath(self.project_file))

    def test_locators_of_other_kinds_are_ignored(self):
        other = MagicMock()
        other.locator_type = "source"
        case = self._case(other, ExplicitProjectLocator(self.project_file))

        locate_project_file(case, self.logger)

        other.try_locate.assert_not_called()

    def test_all_attempted_paths_are_reported(self):
        first = os.path.join(self.test_dir, "One.csproj")
        second = os.path.join(self.test_dir, "Two.csproj")
        silent = MagicMock()
        silent.locator_type = ExplicitProjectLocator.locator_type
        silent.try_locate.return_value = (False, None)
        case = self._case(ExplicitProjectLocator(first), silent, ExplicitProjectLocator(second))

        with self.assertRaises(ProjectFileNotFoundError) as ctx:
            locate_project_file(case, self.logger)

        self.assertEqual(ctx.exception.attempted_paths, [first, second])
        self.assertIn(first, str(ctx.exception))
        self.assertIn(second, str(ctx.exception))
        self.assertIsInstance(ctx.exception, FileNotFoundError)

    def test_no_locators_raises(self):
        with self.assertRaises(ProjectFileNotFoundError):
            locate_project_file(self._case(), self.logger)

    def test_project_file_locator_walks_up_from_assembly(self):
        case = self._case(ProjectFileLocator())

        self.assertEqual(locate_project_file(case, self.logger), self.project_file)

    def test_project_file_locator_reports_guess(self):
        assembly = os.path.join(self.test_dir, "out", "Other.dll")
        descriptor = BenchmarkDescriptor("Other", assembly)
        found, path = ProjectFileLocator().try_locate(LocatorArgs(BenchmarkCase(descriptor), self.logger))

        self.assertTrue(found)
        self.assertEqual(path, os.path.join(self.test_dir, "out", "Other.csproj"))

    def test_project_file_locator_needs_an_assembly_location(self):
        descriptor = BenchmarkDescriptor("Bench", "")
        found, path = ProjectFileLocator().try_locate(LocatorArgs(BenchmarkCase(descriptor), self.logger))

        self.assertFalse(found)
        self.assertIsNone(path)


if __name__ == "__main__":
    unittest.main()
