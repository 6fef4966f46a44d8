"""Tests for package manager counting."""

import pytest

from hello_term.errors import CommandError
from hello_term.packages import (
    DISABLED,
    PackageCounter,
    PackageManager,
    describe_packages,
    describe_updates,
    parse_portage_updates,
)

EIX_UPDATES = ("eix", "-u", "--format", "<installedversions:nameversion>")


def lines(count: int, prefix: str = "pkg") -> str:
    return "".join(f"{prefix}{i} 1.0 -> 1.1\n" for i in range(count))


def test_updates_disabled_without_managers(runner, make_config) -> None:
    counter = PackageCounter(make_config(package_managers=None), runner)

    assert counter.check_updates() == DISABLED
    assert counter.count_installed() == DISABLED
    assert runner.calls == []


def test_updates_summed_across_managers(runner, make_config) -> None:
    runner.add(["checkupdates"], lines(3))
    runner.add(["apt", "list", "-u"], "WARNING: unstable CLI\nListing...\n" + lines(3))
    counter = PackageCounter(make_config(package_managers=["pacman", "apt"]), runner)

    assert counter.check_updates() == 6


def test_single_string_manager(runner, make_config) -> None:
    runner.add(["xbps-install", "-Sun"], lines(4))
    counter = PackageCounter(make_config(package_managers="xbps"), runner)

    assert counter.check_updates() == 4


def test_unknown_manager_ignored(runner, make_config) -> None:
    runner.add(["apk", "-u", "list"], lines(2))
    counter = PackageCounter(make_config(package_managers=["homebrew", "apk"]), runner)

    assert counter.check_updates() == 2
    assert runner.calls == [["apk", "-u", "list"]]


def test_only_unknown_managers_count_zero(runner, make_config) -> None:
    counter = PackageCounter(make_config(package_managers=["homebrew"]), runner)

    assert counter.check_updates() == 0


def test_dnf_update_exit_code_is_not_an_error(runner, make_config) -> None:
    runner.add(["dnf", "check-update"], "Last metadata check\n\n" + lines(5), returncode=100)
    counter = PackageCounter(make_config(package_managers=["dnf"]), runner)

    assert counter.check_updates() == 5


def test_missing_tool_is_fatal(runner, make_config) -> None:
    counter = PackageCounter(make_config(package_managers=["pacman"]), runner)

    with pytest.raises(CommandError):
        counter.check_updates()


@pytest.mark.parametrize("output, expected", [
    ("[I] app-misc/foo\nFound 7 matches\n", 7),
    ("No matches\n", 0),
    ("", 1),
    ("garbage\n", 1),
])
def test_portage_updates(runner, make_config, output: str, expected: int) -> None:
    runner.add(list(EIX_UPDATES), output)
    counter = PackageCounter(make_config(package_managers=["portage"]), runner)

    assert counter.check_updates() == expected


@pytest.mark.parametrize("token, expected", [
    ("matches", 0),
    ("7", 7),
    ("garbage", 1),
    (" 12\n", 12),
])
def test_parse_portage_updates(token: str, expected: int) -> None:
    assert parse_portage_updates(token) == expected


def test_installed_counts(runner, make_config) -> None:
    runner.add(["pacman", "-Q"], lines(10))
    runner.add(
        ["dpkg-query", "-l"],
        "Desired=Unknown/Install\n||/ Name Version\n+++-====\nii  bash 5.1\nii  coreutils 9\nrc  old 1\n",
    )
    runner.add(["xbps-query", "-l"], lines(2))
    runner.add(["eix-installed", "-a"], lines(3))
    runner.add(["apk", "info"], lines(4))
    runner.add(["dnf", "list", "installed"], "Installed Packages\n" + lines(5))
    managers = ["pacman", "apt", "xbps", "portage", "apk", "dnf"]
    counter = PackageCounter(make_config(package_managers=managers), runner)

    assert counter.count_installed() == 10 + 2 + 2 + 3 + 4 + 5


def test_installed_counts_every_listed_manager(runner, make_config) -> None:
    runner.add(["pacman", "-Q"], lines(10))
    runner.add(["apk", "info"], lines(4))
    counter = PackageCounter(make_config(package_managers=["pacman", "apk"]), runner)

    assert counter.count_installed() == 14


def test_manager_lookup() -> None:
    assert PackageManager.lookup("dnf") is PackageManager.DNF
    assert PackageManager.lookup("brew") is None


def test_every_manager_has_queries() -> None:
    for manager in PackageManager:
        assert manager.update_query.command
        assert manager.installed_query.command


@pytest.mark.parametrize("count, expected", [
    (0, "☑️ Up to date"),
    (1, "1️⃣ 1 update"),
    (2, "2️⃣ 2 updates"),
    (10, "🔟 10 updates"),
    (11, "‼️ 11 updates"),
])
def test_describe_updates(count: int, expected: str) -> None:
    assert describe_updates(count) == expected


@pytest.mark.parametrize("count, expected", [
    (0, "📦 No packages"),
    (1, "📦 1 package"),
    (1234, "📦 1234 packages"),
])
def test_describe_packages(count: int, expected: str) -> None:
    assert describe_packages(count) == expected


def test_installed_single_string_manager(runner, make_config) -> None:
    runner.add(["pacman", "-Q"], lines(9))
    counter = PackageCounter(make_config(package_managers="pacman"), runner)

    assert counter.count_installed() == 9
    assert runner.calls == [["pacman", "-Q"]]


def test_both_counters_sum_the_same_managers(runner, make_config) -> None:
    runner.add(["checkupdates"], lines(2))
    runner.add(["xbps-install", "-Sun"], lines(3))
    runner.add(["pacman", "-Q"], lines(20))
    runner.add(["xbps-query", "-l"], lines(30))
    counter = PackageCounter(make_config(package_managers=["pacman", "xbps"]), runner)

    assert counter.check_updates() == 5
    assert counter.count_installed() == 50
