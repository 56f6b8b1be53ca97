from typing import Final

PRECOMPILED_ENTRYPOINT_NAME: Final = "precompiled"
