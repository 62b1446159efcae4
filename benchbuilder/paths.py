import os
from dataclasses import dataclass

FALLBACK_ARTIFACTS_DIRECTORY = "BenchmarkDotNet.Bin"
PROJECT_FILE_NAME = "BenchmarkDotNet.Autogenerated.csproj"
DEFAULT_CODE_EXTENSION = ".notcs"


@dataclass(frozen=True)
class ArtifactsPaths:
    program_name: str
    build_artifacts_directory_path: str
    binaries_directory_path: str
    intermediate_directory_path: str
    program_code_path: str
    project_file_path: str


def get_build_artifacts_directory_path(build_request, program_name):
    # assemblies loaded from a stream have no location on disk
    if not build_request.assembly_location:
        directory_name = os.path.join(os.getcwd(), FALLBACK_ARTIFACTS_DIRECTORY)
    else:
        directory_name = build_request.assembly_directory
    return os.path.join(directory_name, program_name)


def get_project_file_path(build_artifacts_directory_path):
    return os.path.join(build_artifacts_directory_path, PROJECT_FILE_NAME)


def get_binaries_directory_path(build_artifacts_directory_path, configuration, target_framework_moniker):
    return os.path.join(build_artifacts_directory_path, "bin", configuration, target_framework_moniker)


def get_intermediate_directory_path(build_artifacts_directory_path, configuration, target_framework_moniker):
    return os.path.join(build_artifacts_directory_path, "obj", configuration, target_framework_moniker)


def get_artifacts_paths(build_request, program_name, target_framework_moniker, code_extension=DEFAULT_CODE_EXTENSION):
    """Compute every output path for one generated program. No I/O."""
    artifacts_dir = get_build_artifacts_directory_path(build_request, program_name)
    configuration = build_request.build_configuration
    return ArtifactsPaths(
        program_name=program_name,
        build_artifacts_directory_path=artifacts_dir,
        binaries_directory_path=get_binaries_directory_path(artifacts_dir, configuration, target_framework_moniker),
        intermediate_directory_path=get_intermediate_directory_path(artifacts_dir, configuration, target_framework_moniker),
        program_code_path=os.path.join(artifacts_dir, f"{program_name}{code_extension}"),
        project_file_path=get_project_file_path(artifacts_dir),
    )
