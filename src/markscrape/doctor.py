"""Diagnostic tool for verifying the markscrape installation."""

import sys
from importlib import import_module
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

# (import name, distribution name)
CORE_DEPENDENCIES = (
    ("aiohttp", "aiohttp"),
    ("bs4", "beautifulsoup4"),
    ("markdownify", "markdownify"),
    ("playwright.async_api", "playwright"),
    ("pydantic", "pydantic"),
    ("rich", "rich"),
    ("yaml", "pyyaml"),
)


def check_dependency(module_name: str, package_name: Optional[str] = None) -> tuple[bool, str]:
    """
    Check if a Python module is importable.

    Args:
        module_name: Name of the module to import
        package_name: Display name of the package (defaults to module_name)

    Returns:
        Tuple of (success: bool, message: str)
    """
    display_name = package_name or module_name

    try:
        import_module(module_name)
        return True, f"[OK] {display_name}"
    except ImportError:
        return False, f"[MISSING] {display_name}"


def check_chromium() -> tuple[bool, str]:
    """
    Check that Playwright's Chromium build is installed.

    Returns:
        Tuple of (success: bool, message: str)
    """
    try:
        from playwright.sync_api import sync_playwright

        with sync_playwright() as playwright:
            executable = Path(playwright.chromium.executable_path)
    except Exception as e:
        return False, f"[FAIL] Chromium - {e}"

    if not executable.exists():
        return False, "[FAIL] Chromium - not installed (run: playwright install chromium)"
    return True, f"[OK] Chromium ({executable})"


def run_doctor() -> int:
    """
    Run diagnostic checks and display results.

    Returns:
        Exit code (0 if everything needed to serve requests is present, 1 otherwise)
    """
    console = Console()
    console.print("Running markscrape diagnostics...\n")

    dependency_results = [check_dependency(module, package) for module, package in CORE_DEPENDENCIES]
    # Chromium is only checked once Playwright itself imports
    installed = {package: ok for (_, package), (ok, _) in zip(CORE_DEPENDENCIES, dependency_results)}
    browser_results = [check_chromium()] if installed["playwright"] else []

    all_checks = {
        "Dependencies": dependency_results,
        "Browser": browser_results,
    }

    for category, results in all_checks.items():
        if not results:
            continue
        table = Table(title=category, show_header=False, box=None)
        table.add_column("Status", style="bold")
        for success, message in results:
            table.add_row(message, style="green" if success else "red")
        console.print(table)
        console.print()

    failed = [message for success, message in dependency_results + browser_results if not success]
    if failed:
        console.print("WARNING: markscrape is not ready to serve requests.")
        console.print("\nRecommended fixes:")
        console.print("  1. pip install --upgrade --force-reinstall markscrape")
        console.print("  2. playwright install chromium")
        return 1

    console.print("All dependencies installed correctly!")
    return 0


if __name__ == "__main__":
    sys.exit(run_doctor())
