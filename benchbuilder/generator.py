import os
import xml.etree.ElementTree as ET

from . import paths
from . import template_renderer
from .locators import locate_project_file
from .runtime_settings import get_runtime_settings
from .settings_merger import SettingsMerger


class CsProjGenerator:
    """Generates the project file that builds one benchmark program.

    The generated project references the host project that defines the
    benchmarks and inherits a small, fixed set of its settings.
    """

    def __init__(self, target_framework_moniker, cli_path=None, packages_path=None,
                 runtime_framework_version=None):
        self.target_framework_moniker = target_framework_moniker
        self.cli_path = cli_path
        self.packages_path = packages_path
        self.runtime_framework_version = runtime_framework_version

    def get_build_artifacts_directory_path(self, build_request, program_name):
        return paths.get_build_artifacts_directory_path(build_request, program_name)

    def get_project_file_path(self, build_artifacts_directory_path):
        return paths.get_project_file_path(build_artifacts_directory_path)

    def get_binaries_directory_path(self, build_artifacts_directory_path, configuration):
        return paths.get_binaries_directory_path(
            build_artifacts_directory_path, configuration, self.target_framework_moniker
        )

    def get_intermediate_directory_path(self, build_artifacts_directory_path, configuration):
        return paths.get_intermediate_directory_path(
            build_artifacts_directory_path, configuration, self.target_framework_moniker
        )

    def get_artifacts_paths(self, build_request, program_name, code_extension=paths.DEFAULT_CODE_EXTENSION):
        return paths.get_artifacts_paths(
            build_request, program_name, self.target_framework_moniker, code_extension
        )

    def get_runtime_settings(self, gc_mode, resolver):
        return get_runtime_settings(gc_mode, resolver)

    def locate_host_project(self, benchmark_case, logger):
        return locate_project_file(benchmark_case, logger)

    def get_settings_that_need_to_be_copied(self, project_element, project_file_path):
        merger = SettingsMerger(self.target_framework_moniker, self.runtime_framework_version)
        return merger.merge_document(project_element, project_file_path)

    def generate_project(self, build_request, artifacts_paths, logger):
        """Write the generated project file and return its content."""
        benchmark = build_request.benchmark_case
        project_file = os.path.abspath(self.locate_host_project(benchmark, logger))

        project_element = ET.parse(project_file).getroot()
        custom_properties, sdk_name = self.get_settings_that_need_to_be_copied(project_element, project_file)
        logger.info(f"Using SDK '{sdk_name}' for {artifacts_paths.program_name}")

        content = template_renderer.render(
            template_renderer.load_template(template_renderer.CSPROJ_TEMPLATE),
            {
                template_renderer.PLATFORM: build_request.platform.to_config(),
                template_renderer.CODE_FILE_NAME: os.path.basename(artifacts_paths.program_code_path),
                template_renderer.CSPROJ_PATH: project_file,
                template_renderer.TFM: self.target_framework_moniker,
                template_renderer.PROGRAM_NAME: artifacts_paths.program_name,
                template_renderer.RUNTIME_SETTINGS: self.get_runtime_settings(benchmark.job.gc, build_request.resolver),
                template_renderer.COPIED_SETTINGS: custom_properties,
                template_renderer.CONFIGURATION_NAME: build_request.build_configuration,
                template_renderer.SDK_NAME: sdk_name,
            },
        )

        os.makedirs(os.path.dirname(artifacts_paths.project_file_path), exist_ok=True)
        with open(artifacts_paths.project_file_path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.success(f"Generated project file {artifacts_paths.project_file_path}")
        return content

    def _key(self):
        return (
            self.target_framework_moniker,
            self.runtime_framework_version,
            self.cli_path,
            self.packages_path,
        )

    def __eq__(self, other):
        if not isinstance(other, CsProjGenerator):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"CsProjGenerator({self.target_framework_moniker!r}, runtime_framework_version={self.runtime_framework_version!r})"
