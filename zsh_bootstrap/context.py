from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .lib.env import Paths
from .lib.osdetect import OSProfile
from .lib.pkg import InstallReport


@dataclass(frozen=True)
class BootstrapContext:
    """Run-wide settings handed to every step.

    The profile, paths and flags never change after startup. `report`,
    `decisions` and `ran_steps` accumulate as steps execute.
    """

    profile: OSProfile
    paths: Paths
    search_path: str
    quiet: bool = False
    report: InstallReport = field(default_factory=InstallReport)
    decisions: Dict[str, Any] = field(default_factory=dict)
    ran_steps: List[str] = field(default_factory=list)

    @property
    def capture(self) -> bool:
        # Quiet mode keeps child output out of the terminal (it still reaches the log).
        return self.quiet
