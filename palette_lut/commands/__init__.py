"""Auto-discovery of command modules.

Every .py file in this package that defines a `command` object is
auto-registered by palette_lut.registry.discover().

The explicit imports below ensure PyInstaller includes these modules
in the frozen binary.
"""

# PyInstaller hidden imports, keep this list in sync with command modules
import palette_lut.commands.colormap as _colormap  # noqa: F401
import palette_lut.commands.expand as _expand  # noqa: F401
import palette_lut.commands.table as _table  # noqa: F401
