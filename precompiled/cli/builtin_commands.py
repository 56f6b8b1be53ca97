# Importing these modules registers their commands with RootCommand.

from . import precompile_cli
from . import config_cli

# Keep this at the bottom so it is listed last
from . import version_cli

del precompile_cli
del config_cli
del version_cli
