import os
import click
from .. import config as config_module
from ..characteristics import BenchmarkCase, BenchmarkDescriptor, BuildRequest, GcMode, Job, Platform, Resolver
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..generator import CsProjGenerator
from ..locators import ExplicitProjectLocator, ProjectFileLocator


def _parse_bool(value, key):
    try:
        return config_module.parse_bool(value, key)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _resolve_path(base_path, value):
    if not value:
        return value
    if os.path.isabs(value):
        return value
    return os.path.join(base_path, value)


def create_generator(conf):
    return CsProjGenerator(
        config_module.get_setting(conf, "toolchain", "target_framework_moniker", "net8.0"),
        cli_path=config_module.get_setting(conf, "toolchain", "cli_path"),
        packages_path=config_module.get_setting(conf, "toolchain", "packages_path"),
        runtime_framework_version=config_module.get_setting(conf, "toolchain", "runtime_framework_version"),
    )


def create_build_request(conf, base_path="."):
    """Build the request for one benchmark program from a loaded configuration."""
    assembly_location = _resolve_path(base_path, config_module.get_setting(conf, "benchmark", "assembly_location", ""))
    assembly_name = config_module.get_setting(conf, "benchmark", "assembly_name")
    if not assembly_name and assembly_location:
        assembly_name = os.path.splitext(os.path.basename(assembly_location))[0]

    gc_conf = conf.get("gc", {})
    gc_mode = GcMode(
        server=_parse_bool(gc_conf.get("server"), "gc.server"),
        concurrent=_parse_bool(gc_conf.get("concurrent"), "gc.concurrent"),
        retain_vm=_parse_bool(gc_conf.get("retain_vm"), "gc.retain_vm"),
    )

    locators = (
        ExplicitProjectLocator(_resolve_path(base_path, config_module.get_setting(conf, "benchmark", "project_file"))),
        ProjectFileLocator(),
    )
    benchmark_case = BenchmarkCase(
        BenchmarkDescriptor(assembly_name or "", assembly_location or ""),
        Job(gc_mode),
        locators,
    )

    platform_name = config_module.get_setting(conf, "build", "platform", Platform.ANY_CPU.value)
    try:
        platform = Platform.parse(platform_name)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="'--platform'")

    return BuildRequest(
        benchmark_case,
        platform=platform,
        build_configuration=config_module.get_setting(conf, "build", "configuration", "Release"),
        resolver=Resolver(),
    )


@click.command()
@click.pass_context
@click.option("--moniker", "-m", default=None, help="Target framework moniker (e.g., net8.0, netcoreapp3.1).")
@click.option("--configuration", "-c", default=None, help="Build configuration name (e.g., Release).")
@click.option("--platform", default=None, help="Target platform (e.g., AnyCpu, x64, Arm64).")
@click.option("--program-name", default=None, help="Name of the generated benchmark program.")
@click.option("--project", "project_file", default=None, help="Path to the project file that defines the benchmarks.")
@click.option("--assembly", "assembly_location", default=None, help="Path to the compiled benchmark assembly.")
@click.option("--assembly-name", default=None, help="Name of the benchmark assembly, used to locate its project file.")
@click.option("--runtime-framework-version", default=None, help="Use this RuntimeFrameworkVersion and copy nothing from the host project.")
@click.option("--server-gc", type=click.BOOL, default=None, help="Enable (true) or disable (false) server GC.")
@click.option("--concurrent-gc", type=click.BOOL, default=None, help="Enable (true) or disable (false) concurrent GC.")
@click.option("--retain-vm-gc", type=click.BOOL, default=None, help="Enable (true) or disable (false) RetainVM GC.")
@handle_exceptions
def generate(ctx, moniker, configuration, platform, program_name, project_file, assembly_location,
             assembly_name, runtime_framework_version, server_gc, concurrent_gc, retain_vm_gc):
    """Generate the project file for a benchmark program."""
    base_path = ctx.obj["path"]
    conf = config_module.load_config(path=base_path)
    if not conf:
        logger.warning("No benchbuilder.toml found, using default settings.")
        conf = config_module.get_default_config()

    # Override config values with command-line arguments if provided
    if moniker: conf.setdefault("toolchain", {})["target_framework_moniker"] = moniker
    if runtime_framework_version: conf.setdefault("toolchain", {})["runtime_framework_version"] = runtime_framework_version
    if configuration: conf.setdefault("build", {})["configuration"] = configuration
    if platform: conf.setdefault("build", {})["platform"] = platform
    if program_name: conf.setdefault("build", {})["program_name"] = program_name
    if project_file: conf.setdefault("benchmark", {})["project_file"] = os.path.abspath(project_file)
    if assembly_location: conf.setdefault("benchmark", {})["assembly_location"] = os.path.abspath(assembly_location)
    if assembly_name: conf.setdefault("benchmark", {})["assembly_name"] = assembly_name
    if server_gc is not None: conf.setdefault("gc", {})["server"] = server_gc
    if concurrent_gc is not None: conf.setdefault("gc", {})["concurrent"] = concurrent_gc
    if retain_vm_gc is not None: conf.setdefault("gc", {})["retain_vm"] = retain_vm_gc

    generator = create_generator(conf)
    build_request = create_build_request(conf, base_path)
    artifacts_paths = generator.get_artifacts_paths(
        build_request,
        config_module.get_setting(conf, "build", "program_name", "BenchmarkDotNet.Autogenerated"),
        config_module.get_setting(conf, "build", "code_extension", ".notcs"),
    )

    logger.info(f"Generating project for {artifacts_paths.program_name} ({generator.target_framework_moniker})...")
    generator.generate_project(build_request, artifacts_paths, logger)
    click.echo(artifacts_paths.project_file_path)
