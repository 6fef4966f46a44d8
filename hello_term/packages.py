"""
Package manager queries: pending updates and installed package counts.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .config import Config
from .runner import CommandOutput, CommandRunner

logger = logging.getLogger(__name__)

DISABLED = -1

KEYCAPS = {
    1: "1️⃣",
    2: "2️⃣",
    3: "3️⃣",
    4: "4️⃣",
    5: "5️⃣",
    6: "6️⃣",
    7: "7️⃣",
    8: "8️⃣",
    9: "9️⃣",
    10: "🔟",
}


def count_lines(output: CommandOutput, skip: int = 0,
                line_filter: Optional[Callable[[str], bool]] = None) -> int:
    """Count output lines after dropping ``skip`` header lines"""
    lines = output.lines()[skip:]
    if line_filter:
        lines = [line for line in lines if line_filter(line)]
    return len(lines)


def parse_portage_updates(token: str) -> int:
    """
    Interpret the update count field printed by ``eix -u``.

    eix reports "No matches" when nothing is outdated, which leaves the word
    "matches" in the count field.
    """
    token = token.strip()
    if token == "matches":
        return 0
    try:
        return int(token)
    except ValueError:
        return 1


def _portage_update_count(output: CommandOutput) -> int:
    lines = output.lines()
    last = lines[-1] if lines else ""
    fields = last.split(" ")
    # Mirrors `cut -d' ' -f2`, which echoes lines without a delimiter
    token = fields[1] if len(fields) > 1 else last
    return parse_portage_updates(token)


@dataclass(frozen=True)
class PackageQuery:
    """One command plus the rule that turns its output into a count"""

    command: Tuple[str, ...]
    skip: int = 0
    line_filter: Optional[Callable[[str], bool]] = None
    parser: Optional[Callable[[CommandOutput], int]] = None

    def count(self, output: CommandOutput) -> int:
        if self.parser:
            return self.parser(output)
        return count_lines(output, self.skip, self.line_filter)


class PackageManager(Enum):
    PACMAN = "pacman"
    APT = "apt"
    XBPS = "xbps"
    PORTAGE = "portage"
    APK = "apk"
    DNF = "dnf"

    @classmethod
    def lookup(cls, name: str) -> Optional["PackageManager"]:
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def update_query(self) -> PackageQuery:
        return UPDATE_QUERIES[self]

    @property
    def installed_query(self) -> PackageQuery:
        return INSTALLED_QUERIES[self]


UPDATE_QUERIES: Dict[PackageManager, PackageQuery] = {
    PackageManager.PACMAN: PackageQuery(("checkupdates",)),
    PackageManager.APT: PackageQuery(("apt", "list", "-u"), skip=2),
    PackageManager.XBPS: PackageQuery(("xbps-install", "-Sun")),
    PackageManager.PORTAGE: PackageQuery(
        ("eix", "-u", "--format", "<installedversions:nameversion>"),
        parser=_portage_update_count,
    ),
    PackageManager.APK: PackageQuery(("apk", "-u", "list")),
    PackageManager.DNF: PackageQuery(("dnf", "check-update"), skip=2),
}

INSTALLED_QUERIES: Dict[PackageManager, PackageQuery] = {
    PackageManager.PACMAN: PackageQuery(("pacman", "-Q")),
    PackageManager.APT: PackageQuery(("dpkg-query", "-l"), line_filter=lambda line: "ii" in line),
    PackageManager.XBPS: PackageQuery(("xbps-query", "-l")),
    PackageManager.PORTAGE: PackageQuery(("eix-installed", "-a")),
    PackageManager.APK: PackageQuery(("apk", "info")),
    PackageManager.DNF: PackageQuery(("dnf", "list", "installed"), skip=1),
}


class PackageCounter:
    """Sums package counts across every configured package manager"""

    def __init__(self, config: Config, runner: CommandRunner):
        self.config = config
        self.runner = runner

    def _configured(self) -> Optional[List[PackageManager]]:
        names = self.config.package_managers
        if names is None:
            return None

        managers = []
        for name in names:
            manager = PackageManager.lookup(name)
            if manager is None:
                logger.debug("Ignoring unknown package manager %r", name)
                continue
            managers.append(manager)
        return managers

    def _total(self, query_of: Callable[[PackageManager], PackageQuery]) -> int:
        managers = self._configured()
        if managers is None:
            return DISABLED

        total = 0
        for manager in managers:
            query = query_of(manager)
            # Exit codes carry meaning here (dnf check-update exits 100
            # when updates exist), so only launch failures are errors.
            output = self.runner.run(list(query.command), check=False)
            count = query.count(output)
            logger.debug("%s: %d", manager.value, count)
            total += count
        return total

    def check_updates(self) -> int:
        """Total pending updates, or -1 when no package manager is configured"""
        return self._total(lambda manager: manager.update_query)

    def count_installed(self) -> int:
        """Total installed packages, or -1 when no package manager is configured"""
        return self._total(lambda manager: manager.installed_query)


def describe_updates(count: int) -> str:
    if count == 0:
        return "☑️ Up to date"
    if count == 1:
        return f"{KEYCAPS[1]} 1 update"
    if count in KEYCAPS:
        return f"{KEYCAPS[count]} {count} updates"
    return f"‼️ {count} updates"


def describe_packages(count: int) -> str:
    if count == 0:
        return "📦 No packages"
    if count == 1:
        return "📦 1 package"
    return f"📦 {count} packages"
