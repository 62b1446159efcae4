"""Benchmark job characteristics and the build request handed to the generator."""
import enum
import os
from dataclasses import dataclass, field
from typing import Optional


class Characteristic:
    """A named, optional job setting with a default value."""

    def __init__(self, name, default=None):
        self.name = name
        self.default = default

    def __repr__(self):
        return f"Characteristic({self.name!r}, default={self.default!r})"


class GcMode:
    SERVER = Characteristic("Server", False)
    CONCURRENT = Characteristic("Concurrent", True)
    RETAIN_VM = Characteristic("RetainVm", False)

    def __init__(self, server=None, concurrent=None, retain_vm=None):
        self._values = {}
        for characteristic, value in (
            (self.SERVER, server),
            (self.CONCURRENT, concurrent),
            (self.RETAIN_VM, retain_vm),
        ):
            if value is not None:
                self._values[characteristic.name] = value

    def has_value(self, characteristic):
        return characteristic.name in self._values

    def resolve_value(self, characteristic, resolver):
        if self.has_value(characteristic):
            return self._values[characteristic.name]
        return resolver.resolve(characteristic)

    def __repr__(self):
        return f"GcMode({self._values!r})"


class Resolver:
    """Resolves unset characteristics to their effective values.

    Defaults registered on the resolver take precedence over the
    characteristic's own default.
    """

    def __init__(self, defaults=None):
        self._defaults = dict(defaults or {})

    def register(self, characteristic, value):
        self._defaults[characteristic.name] = value

    def resolve(self, characteristic):
        return self._defaults.get(characteristic.name, characteristic.default)


class Platform(enum.Enum):
    ANY_CPU = "AnyCpu"
    X86 = "X86"
    X64 = "X64"
    ARM = "Arm"
    ARM64 = "Arm64"
    LOONG_ARCH64 = "LoongArch64"

    @classmethod
    def parse(cls, value):
        for platform in cls:
            if platform.value.lower() == value.lower() or platform.to_config().lower() == value.lower():
                return platform
        raise ValueError(f"Unknown platform '{value}'. Expected one of: {', '.join(p.value for p in cls)}")

    def to_config(self):
        return _PLATFORM_CONFIG_NAMES[self]


_PLATFORM_CONFIG_NAMES = {
    Platform.ANY_CPU: "AnyCPU",
    Platform.X86: "x86",
    Platform.X64: "x64",
    Platform.ARM: "ARM",
    Platform.ARM64: "ARM64",
    Platform.LOONG_ARCH64: "LoongArch64",
}


@dataclass(frozen=True)
class Job:
    gc: GcMode = field(default_factory=GcMode)


@dataclass(frozen=True)
class BenchmarkDescriptor:
    assembly_name: str
    # empty when the assembly was loaded from memory
    assembly_location: str = ""


@dataclass(frozen=True)
class BenchmarkCase:
    descriptor: BenchmarkDescriptor
    job: Job = field(default_factory=Job)
    file_locators: tuple = ()


@dataclass(frozen=True)
class BuildRequest:
    benchmark_case: BenchmarkCase
    platform: Platform = Platform.ANY_CPU
    build_configuration: str = "Release"
    resolver: Resolver = field(default_factory=Resolver)

    @property
    def assembly_location(self) -> str:
        return self.benchmark_case.descriptor.assembly_location

    @property
    def assembly_directory(self) -> Optional[str]:
        if not self.assembly_location:
            return None
        return os.path.dirname(os.path.abspath(self.assembly_location))
