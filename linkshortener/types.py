from collections.abc import Callable
from datetime import datetime
from typing import TypeAlias


# Source of "now" for time-dependent checks
Clock: TypeAlias = Callable[[], datetime]

# Opens a URL in an external program, returns True on success
URLOpener: TypeAlias = Callable[[str], bool]
