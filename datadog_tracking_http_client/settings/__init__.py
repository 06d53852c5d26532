from ._config import RumSettings
from ._config import SdkSettings


__all__ = ["RumSettings", "SdkSettings"]
