"""Wire models for the JSON output of the command-line tools."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from gradlite.errors import MalformedManifest, UnresolvedDependency, UnsupportedPlatform
from gradlite.manifest.descriptor import ModuleDescriptor
from gradlite.resolver import Resolution
from gradlite.testing.plan import TestRunPlan


class DescriptorReport(BaseModel):
    path: str
    descriptor: dict[str, Any]

    @classmethod
    def build(cls, path: str, descriptor: ModuleDescriptor) -> DescriptorReport:
        return cls(path=path, descriptor=descriptor.to_dict())


class ErrorReport(BaseModel):
    kind: str = Field(min_length=1)
    message: str
    line: int | None = Field(default=None, ge=1)
    coordinates: list[str] = Field(default_factory=list)

    @classmethod
    def from_exception(cls, exc: Exception) -> ErrorReport:
        """Convert a manifest error into its JSON-safe form.

        Example:
            >>> ErrorReport.from_exception(MalformedManifest("bad", line=3)).line
            3
        """
        report = cls(kind=type(exc).__name__, message=str(exc))
        if isinstance(exc, MalformedManifest):
            report.line = exc.line
        elif isinstance(exc, UnresolvedDependency):
            report.coordinates = list(exc.coordinates)
        elif isinstance(exc, UnsupportedPlatform):
            report.message = exc.reason
        return report


class CheckReport(BaseModel):
    path: str
    ok: bool = False
    group: str | None = None
    version: str | None = None
    snapshot: bool = False
    resolved: list[dict[str, Any]] = Field(default_factory=list)
    test_plan: dict[str, Any] | None = None
    errors: list[ErrorReport] = Field(default_factory=list)

    def record_descriptor(self, descriptor: ModuleDescriptor) -> None:
        self.group = descriptor.group
        self.version = descriptor.version
        self.snapshot = descriptor.is_snapshot

    def record_resolution(self, resolution: Resolution) -> None:
        self.resolved = [r.to_dict() for r in resolution.resolved]

    def record_test_plan(self, plan: TestRunPlan) -> None:
        self.test_plan = plan.to_dict()

    def record_error(self, exc: Exception) -> None:
        self.errors.append(ErrorReport.from_exception(exc))
