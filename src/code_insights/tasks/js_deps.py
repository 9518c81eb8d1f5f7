"""js-deps: package dependencies referenced by each source file.

Besides explicit ``import``/``require`` specifiers, some files reference
packages implicitly by a short name: babel configs name plugins and
presets without their prefix, webpack configs name loaders without the
``-loader`` suffix. Those strings are resolved against ``package.json``.
``package.json`` scripts and a JSON eslint config are reported as extra
records.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

import typer

from ..config import DEFAULT_EXCLUDE_PATTERN
from ..logging_config import get_logger, setup_logging
from ..report import RenderedReport, Severity, histogram_table, padcenter, padleft
from ..scanning import FileSelector, sort_dirs_before_files
from ._common import (
    CONFIG_OPTION,
    DEBUG_OPTION,
    LOG_FILE_OPTION,
    PATH_OPTION,
    QUIET_OPTION,
    emit,
    read_text,
    resolve_config,
    tool_errors,
)

logger = get_logger(__name__)

TOOL_NAME = "js-deps"

DEFAULTS = {
    "glob": "**/{.babelrc,*.js}",
    "exclude_pattern": DEFAULT_EXCLUDE_PATTERN,
}

TOP_COUNT = 15

SPECIFIER_RE = re.compile(
    r"""(^\s*import\s+.*?\s+from\s+(['"])([^']+)\2)|(\brequire\((['"])([^']+)\5\))""",
    re.MULTILINE,
)
BARE_STRING_RE = re.compile(r"""(['"])([a-zA-Z][a-zA-Z0-9.-]+)(\1|[?!/])""")
PACKAGE_NAME_RE = re.compile(r"^([^/]+)")

ESLINT_CONFIG_NAMES = (".eslintrc.json", ".eslintrc")

# Packages pulled in by another package without being imported anywhere.
PEER_DEPENDENCIES = {
    "bootstrap-sass-loader": ("bootstrap-sass", "style-loader"),
    "font-awesome-sass-loader": ("font-awesome",),
    "sass-loader": ("node-sass",),
}
DEV_PEER_DEPENDENCIES = {
    "sasslint-webpack-plugin": ("node-sass",),
}

app = typer.Typer(name=TOOL_NAME, add_completion=False, rich_markup_mode="rich")


@dataclass
class PackageManifest:
    """The parts of ``package.json`` dependency detection needs."""

    path: Optional[Path] = None
    dependencies: list[str] = field(default_factory=list)
    dev_dependencies: list[str] = field(default_factory=list)
    scripts: dict[str, str] = field(default_factory=dict)

    def declares(self, name: str) -> bool:
        return name in self.dependencies or name in self.dev_dependencies

    @classmethod
    def load(cls, base_dir: Path) -> "PackageManifest":
        path = base_dir / "package.json"
        data = _read_json(path)
        if data is None:
            logger.info("No package.json found, or unable to load it.")
            return cls()
        return cls(
            path=path,
            dependencies=list(data.get("dependencies") or {}),
            dev_dependencies=list(data.get("devDependencies") or {}),
            scripts=dict(data.get("scripts") or {}),
        )


@dataclass
class DependencyStats:
    path_for_display: str
    dependencies: list[str]

    @property
    def count(self) -> int:
        return len(self.dependencies)


@dataclass
class DepsTotals:
    total: int = 0
    dependencies_histogram: dict[str, int] = field(default_factory=dict)
    dev_dependencies_histogram: dict[str, int] = field(default_factory=dict)
    max_dependencies_per_file: int = 0
    top_files: list[DependencyStats] = field(default_factory=list)


def _read_json(path: Path) -> Optional[dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def _unique(items: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(items))


def find_dependencies(content: str, path_for_display: str, manifest: PackageManifest) -> list[str]:
    """Package specifiers used by one file, explicit ones first, deduplicated."""
    dependencies = [
        match.group(3) or match.group(6)
        for match in SPECIFIER_RE.finditer(content)
        if match.group(3) or match.group(6)
    ]

    is_babel = path_for_display.endswith(".babelrc") or "babel" in path_for_display
    is_webpack = "/webpack/" in f"/{path_for_display}"

    implicit = []
    for match in BARE_STRING_RE.finditer(content):
        name = match.group(2)
        if name in dependencies:
            continue
        resolved = None
        if is_babel:
            resolved = _first_declared(
                manifest, f"babel-plugin-{name}", f"babel-preset-{name}", name
            )
        if resolved is None and is_webpack:
            resolved = _first_declared(manifest, f"{name}-loader", name)
        if resolved is not None:
            implicit.append(resolved)

    return _unique(dependencies + implicit)


def _first_declared(manifest: PackageManifest, *names: str) -> Optional[str]:
    for name in names:
        if manifest.declares(name):
            return name
    return None


def package_json_dependencies(manifest: PackageManifest) -> list[str]:
    """Declared packages whose name appears in one of the npm scripts."""
    return _unique(
        [
            name
            for name in manifest.dependencies + manifest.dev_dependencies
            if any(name in script for script in manifest.scripts.values())
        ]
    )


def eslint_config_dependencies(config: dict[str, Any]) -> list[str]:
    """Packages an eslint config names through extends, parser, plugins and resolvers."""
    dependencies = []

    extends = config.get("extends")
    if isinstance(extends, list):
        for spec in extends:
            if spec.startswith("plugin:"):
                dependencies.append("eslint-plugin-" + spec[len("plugin:") :].split("/")[0])
            elif spec.startswith("eslint:"):
                continue
            else:
                dependencies.append(f"eslint-config-{spec}")
    elif isinstance(extends, str):
        dependencies.append(extends)

    if config.get("parser"):
        dependencies.append(config["parser"])

    for plugin in config.get("plugins") or []:
        dependencies.append(f"eslint-plugin-{plugin}")

    resolvers = (config.get("settings") or {}).get("import/resolver") or {}
    for resolver in resolvers:
        dependencies.append(f"eslint-import-resolver-{resolver}")

    return _unique(dependencies)


def load_eslint_config(base_dir: Path) -> Optional[tuple[Path, dict[str, Any]]]:
    for name in ESLINT_CONFIG_NAMES:
        path = base_dir / name
        config = _read_json(path)
        if config is not None:
            return path, config
    logger.info("No eslint config found, or unable to load it.")
    return None


def summarize(stats: Sequence[DependencyStats], manifest: PackageManifest) -> DepsTotals:
    totals = DepsTotals(total=len(stats))

    def add(histogram: dict[str, int], name: str) -> None:
        histogram[name] = histogram.get(name, 0) + 1

    for item in stats:
        for dependency in item.dependencies:
            match = PACKAGE_NAME_RE.match(dependency)
            if match is None or match.group(1) == ".":
                continue
            package = match.group(1)
            if package in manifest.dependencies:
                add(totals.dependencies_histogram, package)
            if package in manifest.dev_dependencies:
                add(totals.dev_dependencies_histogram, package)
        totals.max_dependencies_per_file = max(totals.max_dependencies_per_file, item.count)

    for source, histogram in (
        (PEER_DEPENDENCIES, totals.dependencies_histogram),
        (DEV_PEER_DEPENDENCIES, totals.dev_dependencies_histogram),
    ):
        for package, peers in source.items():
            if histogram.get(package, 0) > 0:
                for peer in peers:
                    add(totals.dependencies_histogram, peer)

    totals.top_files = sorted(stats, key=lambda item: -item.count)[:TOP_COUNT]
    return totals


def render_dependencies(
    stats: Sequence[DependencyStats], manifest: PackageManifest, verbose: bool = False
) -> RenderedReport:
    ordered = sort_dirs_before_files(stats, key=lambda item: item.path_for_display)
    totals = summarize(ordered, manifest)
    report = RenderedReport(totals=totals)

    for item in ordered:
        if item.count > 1:
            level = Severity.FLAGGED if item.count > 10 else Severity.CAUTION
            report.add(f"[ {padcenter(item.count, 6)} ] {item.path_for_display}", level)
        else:
            report.add(f"[    0   ] {item.path_for_display}", Severity.HEALTHY)
        if verbose:
            for dependency in item.dependencies:
                report.add(f"{padleft('', 10)} {dependency}")

    for label, histogram in (
        ("dependencies", totals.dependencies_histogram),
        ("devDependencies", totals.dev_dependencies_histogram),
    ):
        report.add()
        report.add(f"Number of files that depend on external `{label}`:", Severity.MUTED)
        for row in histogram_table(histogram):
            report.add(row)

    report.add()
    report.add(f"Total files:  {totals.total}", Severity.MUTED)
    report.add(
        f"Max dependencies per file: {padleft(totals.max_dependencies_per_file, 5)}",
        Severity.MUTED,
    )
    report.add(f"Top {len(totals.top_files)} by number of dependencies:", Severity.MUTED)
    for item in totals.top_files:
        report.add(f"{padleft(item.count, 10)} {item.path_for_display}")
        if verbose:
            for dependency in item.dependencies:
                report.add(f"{padleft('', 11)}{dependency}")
    return report


@app.command()
def js_deps(
    verbose: bool = typer.Option(False, "--verbose", help="List all found dependencies."),
    path: Optional[Path] = PATH_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
    log_file: Optional[Path] = LOG_FILE_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
):
    """Find dependencies inside source code files."""
    with tool_errors(TOOL_NAME, debug):
        log = setup_logging(TOOL_NAME, debug=debug, quiet=quiet, log_file=log_file)
        settings = resolve_config(
            TOOL_NAME, DEFAULTS, path=path, config=config, verbose=verbose or None
        )
        base_dir = settings.base_path
        manifest = PackageManifest.load(base_dir)

        selector = FileSelector(settings)
        log.info(f"Scanning {selector.describe()}")
        records = selector.select()

        stats = []
        for record in records:
            content = read_text(record)
            stats.append(
                DependencyStats(
                    record.path_for_display,
                    find_dependencies(content, record.path_for_display, manifest),
                )
            )

        if manifest.path is not None:
            stats.append(DependencyStats("package.json", package_json_dependencies(manifest)))

        eslint = load_eslint_config(base_dir)
        if eslint is not None:
            eslint_path, eslint_config = eslint
            stats.append(
                DependencyStats(eslint_path.name, eslint_config_dependencies(eslint_config))
            )

        emit(render_dependencies(stats, manifest, verbose=settings.verbose))
