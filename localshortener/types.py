from collections.abc import Callable
from datetime import datetime
from typing import Any


# Type aliases for handler payloads
type HandlerEvent = dict[str, Any]
type HandlerResponse = dict[str, Any]
type AppConfig = dict[str, Any]

# Type aliases for injected collaborators
type Clock = Callable[[], datetime]
type LocationProvider = Callable[[], str]
type JSONValue = Any
