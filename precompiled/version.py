from typing import Final

PRECOMPILED_SEMVER: Final = "0.3.0"

COPYRIGHT_NOTICE: Final = """\
Copyright (C) The precompiled authors.
All rights reserved.
License: Apache-2.0 <https://www.apache.org/licenses/LICENSE-2.0>
\
"""
