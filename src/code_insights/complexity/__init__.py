"""Legacy-style JavaScript complexity engine (escomplex metrics)."""

from .metrics import calculate_halstead, cyclomatic_density, maintainability_index
from .models import (
    DYNAMIC_DEPENDENCY,
    MAINTAINABILITY_LOW,
    MAINTAINABILITY_MAX,
    MAINTAINABILITY_MEDIUM,
    Dependency,
    FunctionReport,
    HalsteadCounts,
    HalsteadMetrics,
    ModuleReport,
    ProjectReport,
)
from .module import ModuleAnalyser, analyse_module
from .project import ProjectSettings, analyse_project
from .rules import WalkerSettings

__all__ = [
    "MAINTAINABILITY_MAX",
    "MAINTAINABILITY_LOW",
    "MAINTAINABILITY_MEDIUM",
    "DYNAMIC_DEPENDENCY",
    "Dependency",
    "FunctionReport",
    "HalsteadCounts",
    "HalsteadMetrics",
    "ModuleReport",
    "ProjectReport",
    "ModuleAnalyser",
    "analyse_module",
    "ProjectSettings",
    "analyse_project",
    "WalkerSettings",
    "calculate_halstead",
    "cyclomatic_density",
    "maintainability_index",
]
