"""Tool registry: each tool is a module exposing a typer ``app``."""

TOOLS = {
    "dup-names": "code_insights.tasks.dup_names",
    "js-complex": "code_insights.tasks.js_complex",
    "js-deps": "code_insights.tasks.js_deps",
    "loc": "code_insights.tasks.loc",
    "react-redux-connect": "code_insights.tasks.react_redux_connect",
    "todo": "code_insights.tasks.todo",
}

__all__ = ["TOOLS"]
