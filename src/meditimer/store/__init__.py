from .kv import KeyValueStore, SqliteKeyValueStore
from .templates import DEFAULT_TEMPLATES_KEY, TemplateStore

__all__ = [
    "DEFAULT_TEMPLATES_KEY",
    "KeyValueStore",
    "SqliteKeyValueStore",
    "TemplateStore",
]
