"""
Report assembly: greeting and date lines from the local clock, then every fact
collector in order, printed as a box.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from rich.console import Console
from rich.text import Text

from .config import Config
from .errors import GreeterError
from .monitor import SystemMonitor
from .packages import DISABLED, PackageCounter, describe_packages, describe_updates
from .runner import CommandRunner
from .text import format_footer, format_header, format_row
from .weather import WeatherClient

logger = logging.getLogger(__name__)

Collector = Callable[[], Optional[str]]

CLOCK_ICONS = ["🕛", "🕐", "🕑", "🕒", "🕓", "🕔", "🕕", "🕖", "🕗", "🕘", "🕙", "🕚"]


def greeting(name: str, now: Optional[datetime] = None) -> str:
    """Generate a greeting based on the hour of day"""
    hour = (now or datetime.now()).hour

    if 6 <= hour <= 11:
        time_greeting = "🌇 Good morning"
    elif 12 <= hour <= 17:
        time_greeting = "🏙️ Good afternoon"
    elif 18 <= hour <= 22:
        time_greeting = "🌆 Good evening"
    else:
        time_greeting = "🌃 Good night"

    return f"{time_greeting}, {name}"


def ordinal(day: int) -> str:
    if day in (1, 21, 31):
        return f"{day}st"
    if day in (2, 22):
        return f"{day}nd"
    if day in (3, 23):
        return f"{day}rd"
    return f"{day}th"


def format_time(now: datetime, time_format: str) -> str:
    if time_format == "12h":
        return f"{now.hour % 12 or 12}:{now:%M %p}"
    if time_format == "24h":
        return f"{now:%H:%M}"
    return "off"


def clock_icon(hour: int) -> str:
    return CLOCK_ICONS[hour % 12]


def date_line(time_format: str, now: Optional[datetime] = None) -> str:
    """Clock face, month, ordinal day and time, e.g. 🕒 March 3rd, 3:05 PM"""
    now = now or datetime.now()
    return f"{clock_icon(now.hour)} {now:%B} {ordinal(now.day)}, {format_time(now, time_format)}"


@dataclass
class FactResult:
    """Outcome of one collector: a row text, nothing to show, or an error"""

    name: str
    value: Optional[str] = None
    error: Optional[GreeterError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_collector(name: str, collector: Collector) -> FactResult:
    try:
        return FactResult(name, value=collector())
    except GreeterError as e:
        return FactResult(name, error=e)


class SystemGreeter:
    """Main application class"""

    def __init__(self, config: Config, runner: Optional[CommandRunner] = None,
                 console: Optional[Console] = None,
                 monitor: Optional[SystemMonitor] = None,
                 counter: Optional[PackageCounter] = None,
                 weather: Optional[WeatherClient] = None,
                 keep_going: bool = False):
        self.config = config
        self.runner = runner or CommandRunner()
        self.console = console or Console(highlight=False, emoji=False, markup=False, soft_wrap=True)
        self.monitor = monitor or SystemMonitor(config, self.runner)
        self.counter = counter or PackageCounter(config, self.runner)
        self.weather = weather or WeatherClient()
        self.keep_going = keep_going

    def _weather(self) -> str:
        config = self.config
        return self.weather.current(config.location, config.units, config.lang, config.api_key)

    def _updates(self) -> Optional[str]:
        count = self.counter.check_updates()
        return None if count == DISABLED else describe_updates(count)

    def _packages(self) -> Optional[str]:
        count = self.counter.count_installed()
        return None if count == DISABLED else describe_packages(count)

    def _optional(self, icon: str, collector: Collector) -> Collector:
        def collect() -> Optional[str]:
            value = collector()
            return None if value is None else f"{icon} {value}"
        return collect

    def collectors(self) -> List[Tuple[str, Collector]]:
        """Fact collectors in display order"""
        monitor = self.monitor
        return [
            ("greeting", lambda: greeting(self.config.name) + "!"),
            ("datetime", lambda: date_line(self.config.time_format)),
            ("weather", self._weather),
            ("release", lambda: f"💻 {monitor.get_release()}"),
            ("kernel", lambda: f"🫀 {monitor.get_kernel()}"),
            ("cpu", lambda: f"🔌 {monitor.get_cpu()}"),
            ("memory", lambda: f"🧠 {monitor.get_memory()}"),
            ("disk", lambda: f"💾 {monitor.get_disk()}"),
            ("desktop", self._optional("🖥️", monitor.get_desktop)),
            ("updates", self._updates),
            ("packages", self._packages),
            ("song", self._optional("🎵", monitor.get_song)),
        ]

    def collect(self) -> List[FactResult]:
        """Run every collector, stopping at the first failure unless keep_going is set"""
        results = [run_collector("hostname", lambda: self.config.hostname)]
        if not results[0].ok and not self.keep_going:
            raise results[0].error

        for name, collector in self.collectors():
            result = run_collector(name, collector)
            if not result.ok:
                if not self.keep_going:
                    raise result.error
                logger.warning("Skipping %s: %s", name, result.error)
            results.append(result)
        return results

    def build_report(self) -> List[str]:
        """Collect all facts and lay them out as box rows"""
        rows = []
        for result in self.collect():
            if not result.ok or result.value is None:
                continue
            if result.name == "hostname":
                rows.append(format_header(result.value))
            else:
                rows.append(format_row(f"│ {result.value}"))

        if not rows or not rows[0].startswith("╭"):
            rows.insert(0, format_header(""))
        rows.append(format_footer())
        return rows

    def run(self) -> List[str]:
        """Print the report"""
        rows = self.build_report()
        header, body = rows[0], rows[1:]
        self.console.print(Text.from_ansi(header))
        for row in body:
            self.console.print(row)
        return rows
