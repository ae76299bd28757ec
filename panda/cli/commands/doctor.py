# panda/cli/commands/doctor.py
"""
Doctor command.

Checks that the external tools a run depends on are installed and that the
workspace configuration is usable.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional

import typer

from panda.cli.ui import ui
from panda.config import PandaConfig, load_config
from panda.core.exceptions import ConfigError, ConfigNotFoundError
from panda.core.paths import PandaPaths


def check_python() -> tuple[bool, str]:
    version = sys.version.split()[0]
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    return ok, f"Python {version}" + ("" if ok else " (3.10+ required)")


def check_executable(name: str) -> tuple[bool, str]:
    """Check that a program is on PATH and report its version line."""
    path = shutil.which(name)
    if path is None:
        return False, "not found on PATH"

    try:
        result = subprocess.run(
            [path, "--version"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return True, f"{path} (version check timed out)"
    except OSError as e:
        return False, f"{path} cannot be executed: {e}"

    first_line = (result.stdout or result.stderr).strip().splitlines()
    version = first_line[0] if first_line else "unknown version"
    return True, f"{version} ({path})"


def check_config() -> tuple[bool, str, Optional[PandaConfig]]:
    try:
        config = load_config()
    except ConfigNotFoundError:
        return False, f"{PandaPaths.config()} not found (run: panda init)", None
    except ConfigError as e:
        return False, str(e).splitlines()[0], None
    return True, f"loaded from {PandaPaths.config()}", config


def check_directory(path: str, must_exist: bool) -> tuple[bool, str]:
    if not path:
        return False, "not set"
    resolved = Path(path).expanduser()
    if resolved.is_dir():
        return True, str(resolved)
    if must_exist:
        return False, f"{resolved} does not exist"
    return True, f"{resolved} (will be created)"


def command() -> None:
    """Run dependency and configuration checks."""
    ui.header("panda doctor", "Checking dependencies and configuration")
    failures = 0

    ui.section("System")
    ok, detail = check_python()
    ui.status("Python", ok, detail)
    failures += not ok

    ui.section("Configuration")
    ok, detail, config = check_config()
    ui.status("config.yaml", ok, detail)
    failures += not ok

    pandoc_path = config.pandoc_path if config else "pandoc"
    pdf_engine = config.pdf_engine if config else "tectonic"

    if config is not None:
        ok, detail = check_directory(config.source_directory, must_exist=True)
        ui.status("Source directory", ok, detail)
        failures += not ok
        ok, detail = check_directory(config.target_directory, must_exist=False)
        ui.status("Target directory", ok, detail)
        failures += not ok

    ui.section("Dependencies")
    for name in (pandoc_path, pdf_engine):
        ok, detail = check_executable(name)
        ui.status(name, ok, detail)
        failures += not ok

    print()
    if failures:
        ui.error(f"{failures} check(s) failed. Install missing dependencies before running panda.")
        raise typer.Exit(1)
    ui.success("All checks passed")
