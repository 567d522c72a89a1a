from .config_store import delete_config, list_configs, load_config, save_config, select_config
from .executor import execute
from .models import ExecutionResult, FHIRConfig, RequestSpec

__all__ = [
    "ExecutionResult",
    "FHIRConfig",
    "RequestSpec",
    "delete_config",
    "execute",
    "list_configs",
    "load_config",
    "save_config",
    "select_config",
]
