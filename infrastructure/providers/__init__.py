from .frankfurter import FrankfurterClient

__all__ = ['FrankfurterClient']
