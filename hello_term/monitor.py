"""
Operating system facts: release, kernel, load, memory, disk, desktop, song.
"""

import os
from typing import Mapping, Optional

import psutil

from .config import Config
from .errors import SystemInfoError
from .runner import CommandRunner
from .text import truncate, upper_first

NO_PLAYERS = "No players found"
SONG_FORMAT = "{{ artist }} - {{ title }}"


def format_bytes(size: int) -> str:
    """Render a byte count with decimal units, e.g. 7.8 GB"""
    value = float(size)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if value < 1000 or unit == "TB":
            break
        value /= 1000
    if unit == "B":
        return f"{int(value)} B"
    return f"{value:.1f} {unit}"


class SystemMonitor:
    """Linux system information collector"""

    def __init__(self, config: Config, runner: CommandRunner,
                 environ: Optional[Mapping[str, str]] = None):
        self.config = config
        self.runner = runner
        self.environ = os.environ if environ is None else environ

    def get_release(self) -> str:
        """Get the distribution description from lsb_release"""
        output = self.runner.run(["lsb_release", "-s", "-d"])
        return truncate(output.stdout.strip().strip('"'))

    def get_kernel(self) -> str:
        """Get kernel name and release"""
        output = self.runner.run(["uname", "-sr"])
        return truncate(output.stdout.strip())

    def get_cpu(self) -> str:
        """Get the one minute load average as a rough usage figure"""
        try:
            load_one, _, _ = psutil.getloadavg()
        except OSError as e:
            raise SystemInfoError(f"Could not get CPU load: {e}") from e
        return f"{int(load_one * 10)}% Used"

    def get_memory(self) -> str:
        """Get used memory (total minus free)"""
        try:
            memory = psutil.virtual_memory()
        except OSError as e:
            raise SystemInfoError(f"Could not get memory because: {e}") from e
        return f"{format_bytes(max(0, memory.total - memory.free))} Used"

    def get_disk(self) -> str:
        """Get free space on the root filesystem"""
        try:
            disk = psutil.disk_usage("/")
        except OSError as e:
            raise SystemInfoError(f"Could not get disk usage because: {e}") from e
        return f"{format_bytes(disk.free)} Free"

    def get_desktop(self) -> Optional[str]:
        """Get the current desktop environment, None when unset"""
        desktop = self.environ.get("XDG_CURRENT_DESKTOP", "")
        if not desktop:
            return None
        return upper_first(desktop)

    def get_song(self) -> Optional[str]:
        """Get the currently playing song, None when disabled or idle"""
        if not self.config.song_enabled:
            return None

        output = self.runner.run(["playerctl", "metadata", "-f", SONG_FORMAT], check=False)
        if output.stderr.strip() == NO_PLAYERS:
            return None

        song = output.stdout.strip()
        if not song:
            return None
        return truncate(song)
