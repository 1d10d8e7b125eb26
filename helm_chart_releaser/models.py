"""Data models for release planning and execution."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ChartMetadata:
    """Fields read from a chart descriptor, in sorted field order."""
    description: str = ""
    name: str = ""
    version: str = ""


@dataclass(frozen=True)
class ChartReleasePlan:
    """What to do with one changed chart."""
    chart: str  # chart directory, relative to the repository root
    tag: str
    package_path: str
    push_ref: str
    notes: str
    release_exists: bool
    skip: bool  # skip_existing=true and the release is already there
    push: bool
    create_release: bool
    upload_asset: bool
    mark_as_latest: bool = True


@dataclass
class RunResult:
    """Result of a release run."""
    reference: str
    changed_charts: List[str] = field(default_factory=list)
    released_charts: List[str] = field(default_factory=list)
    plans: List[ChartReleasePlan] = field(default_factory=list)

    def has_changes(self) -> bool:
        """Check if any chart changed since the reference commit."""
        return bool(self.changed_charts)
