import enum
import os
from collections import namedtuple

PROJECT_FILE_EXTENSIONS = (".csproj", ".fsproj", ".vbproj")

LocatorArgs = namedtuple("LocatorArgs", ["benchmark_case", "logger"])


class FileLocatorType(enum.Enum):
    PROJECT = "project"


class ProjectFileNotFoundError(FileNotFoundError):
    """No locator produced an existing project file."""

    def __init__(self, attempted_paths):
        self.attempted_paths = list(attempted_paths)
        super().__init__(
            "Unable to find project file. Attempted location(s): " + ", ".join(self.attempted_paths)
        )


class FileLocator:
    """Base class for anything that can guess where a file of a given kind lives.

    ``try_locate`` returns ``(found, path)``. ``found`` means the locator
    produced a candidate. The candidate might still not exist on disk.
    """

    locator_type = FileLocatorType.PROJECT

    def try_locate(self, args):
        raise NotImplementedError


class ExplicitProjectLocator(FileLocator):
    """Reports a project file path that was configured up front."""

    def __init__(self, path):
        self.path = path

    def try_locate(self, args):
        if not self.path:
            return False, None
        return True, os.path.abspath(self.path)


class ProjectFileLocator(FileLocator):
    """Looks for ``<assembly name>.csproj`` (or .fsproj/.vbproj) next to the
    benchmark assembly and in each of its parent directories."""

    def try_locate(self, args):
        descriptor = args.benchmark_case.descriptor
        if not descriptor.assembly_location or not descriptor.assembly_name:
            return False, None

        start_dir = os.path.dirname(os.path.abspath(descriptor.assembly_location))
        directory = start_dir
        while True:
            for extension in PROJECT_FILE_EXTENSIONS:
                candidate = os.path.join(directory, descriptor.assembly_name + extension)
                if os.path.isfile(candidate):
                    args.logger.debug(f"Found project file candidate {candidate}")
                    return True, candidate
            parent = os.path.dirname(directory)
            if parent == directory:
                break
            directory = parent

        return True, os.path.join(start_dir, descriptor.assembly_name + PROJECT_FILE_EXTENSIONS[0])


def locate_project_file(benchmark_case, logger):
    """Return the path of the project file that defines ``benchmark_case``."""
    not_found = []
    args = LocatorArgs(benchmark_case, logger)

    for locator in benchmark_case.file_locators:
        if locator.locator_type != FileLocatorType.PROJECT:
            continue

        found, path = locator.try_locate(args)
        if found:
            if os.path.isfile(path):
                logger.info(f"Located project file {path}")
                return path

            not_found.append(os.path.abspath(path))

    raise ProjectFileNotFoundError(not_found)
