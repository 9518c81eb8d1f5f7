"""
Code Insights - static metrics for JavaScript source trees.

A toolbox of independent command-line scanners behind one dispatcher;
the core tool measures the maintainability index of each file.
"""

__version__ = "0.3.0"

from .config import ToolConfig, load_config
from .exceptions import CodeInsightsError

__all__ = ["__version__", "ToolConfig", "load_config", "CodeInsightsError"]
