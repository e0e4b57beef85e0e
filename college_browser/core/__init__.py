"""
Core domain layer: record model, immutable dataset, the filter/sort/reveal
stages and the DataViewEngine that wires them to a viewport signal and a
scheduler.

Import from the submodules directly, e.g. ``college_browser.core.engine``.
"""

__all__: list[str] = []
