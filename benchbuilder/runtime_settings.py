from .characteristics import GcMode


def _to_msbuild(value):
    return str(value).lower()


def get_runtime_settings(gc_mode, resolver):
    """Return an MSBuild ``PropertyGroup`` that defines the GC runtime settings.

    Server and concurrent GC are always emitted, resolved to their defaults
    when the job leaves them unset. Retain VM is only emitted when the job
    sets it explicitly.
    """
    lines = [
        "<PropertyGroup>",
        f"<ServerGarbageCollection>{_to_msbuild(gc_mode.resolve_value(GcMode.SERVER, resolver))}</ServerGarbageCollection>",
        f"<ConcurrentGarbageCollection>{_to_msbuild(gc_mode.resolve_value(GcMode.CONCURRENT, resolver))}</ConcurrentGarbageCollection>",
    ]

    if gc_mode.has_value(GcMode.RETAIN_VM):
        lines.append(f"<RetainVMGarbageCollection>{_to_msbuild(gc_mode.resolve_value(GcMode.RETAIN_VM, resolver))}</RetainVMGarbageCollection>")

    lines.append("</PropertyGroup>")
    return "\n".join(lines) + "\n"
