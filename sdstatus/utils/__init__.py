from sdstatus.utils.base_model import BaseModel

__all__ = [
    'BaseModel',
]
