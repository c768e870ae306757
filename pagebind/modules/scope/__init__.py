from .stack import (
    MISSING,
    DataScopeStack,
    NoItemAtIndex,
    ScopeFrame,
    descend,
    iterate_frames,
    select_index,
)

__all__ = [
    'MISSING', 'DataScopeStack', 'NoItemAtIndex', 'ScopeFrame',
    'descend', 'iterate_frames', 'select_index'
]
