"""Copies selected build settings from a host project and everything it imports.

The host project (or one of the ``.props`` files it imports) may contain
settings that the generated project needs as well, for example::

    <NetCoreAppImplicitPackageVersion>2.0.0-beta-001607-00</NetCoreAppImplicitPackageVersion>
    <RuntimeFrameworkVersion>2.0.0-beta-001607-00</RuntimeFrameworkVersion>

Only the settings named in ``SETTINGS_TO_COPY`` are carried over. They are
collected into one ``ItemGroup`` and one ``PropertyGroup`` no matter how deep
in the import graph they were declared.
"""
import copy
import os
import xml.etree.ElementTree as ET
from collections import namedtuple
from xml.sax.saxutils import escape

from .cli_logger import logger

DEFAULT_SDK_NAME = "Microsoft.NET.Sdk"

SETTINGS_TO_COPY = frozenset([
    "NetCoreAppImplicitPackageVersion",
    "RuntimeFrameworkVersion",
    "PackageTargetFallback",
    "LangVersion",
    "UseWpf",
    "UseWindowsForms",
    "CopyLocalLockFileAssemblies",
    "PreserveCompilationContext",
    "UserSecretsId",
    "EnablePreviewFeatures",
    "RuntimeHostConfigurationOption",
])

ITEM_GROUP = "ItemGroup"
PROPERTY_GROUP = "PropertyGroup"

MergeResult = namedtuple("MergeResult", ["custom_properties", "sdk_name"])


class MissingDirectoryError(FileNotFoundError):
    """A project file has no containing directory to resolve imports against."""


def _local_name(tag):
    # comments and processing instructions have callables as tags
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def _descendants(element, name):
    """Yield descendants of ``element`` (not itself) named ``name``, in document order."""
    for node in element.iter():
        if node is not element and _local_name(node.tag) == name:
            yield node


def _strip_namespace(element):
    for node in element.iter():
        name = _local_name(node.tag)
        if name is not None:
            node.tag = name
    return element


def resolve_sdk_name(project_element, target_framework_moniker):
    """Return the SDK that governs the build of ``project_element``.

    Precedence: ``<Import Sdk=...>`` (netcoreapp monikers only), then the
    ``Sdk`` attribute of the root, then ``<Sdk Name=... Version=...>``
    children, then ``DEFAULT_SDK_NAME``.
    """
    sdk_name = None
    # custom SDKs are not added for non-netcoreapp monikers (like net471), so
    # imports guarded by conditions such as
    # <Import Sdk="Microsoft.NET.Sdk.WindowsDesktop" Project="Sdk.props" Condition="'$(TargetFramework)'=='netcoreapp3.0'"/>
    # are only considered for netcoreapp
    if target_framework_moniker.lower().startswith("netcoreapp"):
        for import_element in _descendants(project_element, "Import"):
            sdk_name = import_element.get("Sdk")
            if sdk_name:
                break

    if not sdk_name:
        sdk_name = project_element.get("Sdk")

    if not sdk_name:
        for sdk_element in _descendants(project_element, "Sdk"):
            sdk_name = sdk_element.get("Name")
            if not sdk_name:
                continue
            version = sdk_element.get("Version")
            if version:
                sdk_name += f"/{version}"
            break

    return sdk_name or DEFAULT_SDK_NAME


def resolve_import_path(project_attribute, importing_directory):
    if os.path.isfile(project_attribute):
        # absolute, or relative to the current directory
        return project_attribute
    return os.path.join(importing_directory, project_attribute)


class SettingsAccumulator:
    """Collects copies of allow-listed settings under a single group element."""

    def __init__(self, group_name):
        self.group_name = group_name
        self.group_element = None

    @property
    def is_empty(self):
        return self.group_element is None

    def add(self, setting):
        if self.group_element is None:
            self.group_element = ET.Element(self.group_name)
        copied = _strip_namespace(copy.deepcopy(setting))
        copied.tail = None
        self.group_element.append(copied)

    def to_xml(self):
        ET.indent(self.group_element, space="  ")
        return ET.tostring(self.group_element, encoding="unicode")


def copy_settings(project_element, accumulator):
    for group_element in _descendants(project_element, accumulator.group_name):
        for setting in group_element:
            if _local_name(setting.tag) in SETTINGS_TO_COPY:
                accumulator.add(setting)


class SettingsMerger:

    def __init__(self, target_framework_moniker, runtime_framework_version=None):
        self.target_framework_moniker = target_framework_moniker
        self.runtime_framework_version = runtime_framework_version

    def _override_result(self):
        return MergeResult(
            "<PropertyGroup>\n"
            f"  <RuntimeFrameworkVersion>{escape(self.runtime_framework_version)}</RuntimeFrameworkVersion>\n"
            "</PropertyGroup>",
            DEFAULT_SDK_NAME,
        )

    def merge(self, project_file_path):
        """Parse the host project at ``project_file_path`` and merge its settings."""
        # power users who set the version explicitly get exactly that and nothing more
        if self.runtime_framework_version:
            return self._override_result()

        project_element = ET.parse(project_file_path).getroot()
        return self.merge_document(project_element, project_file_path)

    def merge_document(self, project_element, project_file_path):
        if self.runtime_framework_version:
            return self._override_result()

        sdk_name = resolve_sdk_name(project_element, self.target_framework_moniker)
        logger.debug(f"Resolved SDK '{sdk_name}' for {project_file_path}")

        item_settings = SettingsAccumulator(ITEM_GROUP)
        property_settings = SettingsAccumulator(PROPERTY_GROUP)
        visited = {os.path.realpath(project_file_path)}
        self._collect(project_element, project_file_path, (item_settings, property_settings), visited)

        custom_settings = [
            accumulator.to_xml()
            for accumulator in (item_settings, property_settings)
            if not accumulator.is_empty
        ]
        return MergeResult("\n\n".join(custom_settings), sdk_name)

    def _collect(self, project_element, project_file_path, accumulators, visited):
        directory_name = os.path.dirname(os.path.abspath(project_file_path))
        if not os.path.isdir(directory_name):
            raise MissingDirectoryError(f"Unable to resolve the directory of project file {project_file_path}")

        for accumulator in accumulators:
            copy_settings(project_element, accumulator)

        for import_element in _descendants(project_element, "Import"):
            import_path = resolve_import_path(import_element.get("Project", ""), directory_name)
            if not os.path.isfile(import_path):
                logger.debug(f"Skipping import '{import_element.get('Project', '')}': not found")
                continue

            canonical_path = os.path.realpath(import_path)
            if canonical_path in visited:
                logger.debug(f"Skipping import {import_path}: already merged")
                continue
            visited.add(canonical_path)

            logger.step_info(f"Merging settings from {import_path}", indent=2)
            import_root = ET.parse(import_path).getroot()
            self._collect(import_root, import_path, accumulators, visited)
