from .bulkhead import Bulkhead
from .executor import CallExecutor, ResilienceConfig

__all__ = ['Bulkhead', 'CallExecutor', 'ResilienceConfig']
