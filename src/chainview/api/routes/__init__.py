from .explorer import router as explorer_router
from .network import router as network_router

__all__ = ['explorer_router', 'network_router']
