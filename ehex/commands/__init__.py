"""Auto-discovery of command modules.

Every .py file in this package that defines a `command` object is
auto-registered by ehex.registry.discover().

The explicit imports below ensure PyInstaller includes these modules
in the frozen binary. Without them, pkgutil.iter_modules cannot find
the command files at runtime.
"""

# PyInstaller hidden imports — keep this list in sync with command modules
import ehex.commands.convert as _convert  # noqa: F401
import ehex.commands.export as _export  # noqa: F401
import ehex.commands.import_ as _import  # noqa: F401
import ehex.commands.info as _info  # noqa: F401
import ehex.commands.new as _new  # noqa: F401
import ehex.commands.paint as _paint  # noqa: F401
import ehex.commands.resize as _resize  # noqa: F401
import ehex.commands.sample as _sample  # noqa: F401
import ehex.commands.view as _view  # noqa: F401
