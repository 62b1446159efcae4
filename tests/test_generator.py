import os
import shutil
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from benchbuilder.characteristics import (
    BenchmarkCase,
    BenchmarkDescriptor,
    BuildRequest,
    GcMode,
    Job,
    Platform,
    Resolver,
)
from benchbuilder.generator import CsProjGenerator
from benchbuilder.locators import ExplicitProjectLocator, ProjectFileNotFoundError


class TestCsProjGenerator(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.logger = MagicMock()
        patcher = patch('benchbuilder.settings_merger.logger')
        patcher.start()
        self.addCleanup(patcher.stop)

        with open(os.path.join(self.test_dir, "Directory.Build.props"), "w") as f:
            f.write("<Project><PropertyGroup><LangVersion>9.0</LangVersion></PropertyGroup></Project>")
        self.host = os.path.join(self.test_dir, "Bench.csproj")
        with open(self.host, "w") as f:
            f.write("""<Project Sdk="Microsoft.NET.Sdk.Web">
  <Import Project="Directory.Build.props" />
  <PropertyGroup>
    <TargetFramework>net8.0</TargetFramework>
  </PropertyGroup>
</Project>""")
        self.assembly = os.path.join(self.test_dir, "bin", "Release", "net8.0", "Bench.dll")

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def _request(self, *locators, gc_mode=None):
        descriptor = BenchmarkDescriptor("Bench", self.assembly)
        case = BenchmarkCase(descriptor, Job(gc_mode or GcMode()), locators)
        return BuildRequest(case, Platform.X64, "Release", Resolver())

    def test_generate_project_writes_rendered_file(self):
        generator = CsProjGenerator("net8.0")
        request = self._request(ExplicitProjectLocator(self.host), gc_mode=GcMode(server=True))
        artifacts = generator.get_artifacts_paths(request, "Prog")

        content = generator.generate_project(request, artifacts, self.logger)

        self.assertTrue(os.path.exists(artifacts.project_file_path))
        with open(artifacts.project_file_path) as f:
            self.assertEqual(f.read(), content)
        self.assertIn('<Project Sdk="Microsoft.NET.Sdk.Web">', content)
        self.assertIn("<TargetFramework>net8.0</TargetFramework>", content)
        self.assertIn("<PlatformTarget>x64</PlatformTarget>", content)
        self.assertIn("<AssemblyName>Prog</AssemblyName>", content)
        self.assertIn("<Configurations>Release</Configurations>", content)
        self.assertIn('<Compile Include="Prog.notcs"', content)
        self.assertIn(f'<ProjectReference Include="{self.host}" />', content)
        self.assertIn("<LangVersion>9.0</LangVersion>", content)
        self.assertIn("<ServerGarbageCollection>true</ServerGarbageCollection>", content)
        self.assertNotIn("RetainVMGarbageCollection", content)
        self.assertIn("$(Configuration)", content)
        self.assertNotIn("$SDKNAME$", content)
        self.assertNotIn("$COPIEDSETTINGS$", content)
        self.logger.success.assert_called_once()

    def test_artifacts_directory_is_next_to_assembly(self):
        generator = CsProjGenerator("net8.0")
        artifacts = generator.get_artifacts_paths(self._request(), "Prog")

        self.assertEqual(
            artifacts.project_file_path,
            os.path.join(self.test_dir, "bin", "Release", "net8.0", "Prog", "BenchmarkDotNet.Autogenerated.csproj"),
        )
        self.assertEqual(
            generator.get_binaries_directory_path(artifacts.build_artifacts_directory_path, "Release"),
            artifacts.binaries_directory_path,
        )

    def test_runtime_framework_version_skips_inheritance(self):
        generator = CsProjGenerator("netcoreapp3.1", runtime_framework_version="3.1.0")
        request = self._request(ExplicitProjectLocator(self.host))

        content = generator.generate_project(request, generator.get_artifacts_paths(request, "Prog"), self.logger)

        self.assertIn("<RuntimeFrameworkVersion>3.1.0</RuntimeFrameworkVersion>", content)
        self.assertNotIn("LangVersion", content)
        self.assertIn('<Project Sdk="Microsoft.NET.Sdk">', content)

    def test_missing_host_project_raises(self):
        generator = CsProjGenerator("net8.0")
        request = self._request(ExplicitProjectLocator(os.path.join(self.test_dir, "Nope.csproj")))

        with self.assertRaises(ProjectFileNotFoundError):
            generator.generate_project(request, generator.get_artifacts_paths(request, "Prog"), self.logger)

    def test_equality(self):
        self.assertEqual(CsProjGenerator("net8.0", "dotnet", None, "8.0.1"), CsProjGenerator("net8.0", "dotnet", None, "8.0.1"))
        self.assertEqual(hash(CsProjGenerator("net8.0")), hash(CsProjGenerator("net8.0")))
        self.assertNotEqual(CsProjGenerator("net8.0"), CsProjGenerator("net8.0", runtime_framework_version="8.0.1"))
        self.assertNotEqual(CsProjGenerator("net8.0"), CsProjGenerator("net7.0"))
        self.assertNotEqual(CsProjGenerator("net8.0"), "net8.0")


if __name__ == "__main__":
    unittest.main()
